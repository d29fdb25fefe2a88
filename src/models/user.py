"""User models for request and response bodies."""

from typing import Optional

from pydantic import BaseModel

from src.models.common import Number


class UserFields(BaseModel):
    """User fields accepted on create and update. None is required."""

    nombre: Optional[str] = None
    edad: Optional[Number] = None
    correo: Optional[str] = None


class User(UserFields):
    """User record as stored, with its server-assigned id."""

    id: str
