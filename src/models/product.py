"""Product models for request and response bodies."""

from typing import Optional

from pydantic import BaseModel

from src.models.common import Number


class ProductFields(BaseModel):
    """Product fields accepted on create and update. None is required."""

    nombre: Optional[str] = None
    precio: Optional[Number] = None
    descripcion: Optional[str] = None


class Product(ProductFields):
    """Product record as stored, with its server-assigned id."""

    id: str
