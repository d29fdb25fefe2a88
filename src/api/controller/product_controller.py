"""REST controller for the product collection."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from src.api.dependencies import get_product_service
from src.api.request_body import InvalidRecordBodyError, read_record_fields
from src.models import Product, ProductFields
from src.services.record_service import (
    InvalidRecordIdError,
    RecordNotFoundError,
    RecordService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/productos", tags=["productos"])


@router.get("", response_model=list[Product], response_model_exclude_unset=True)
async def list_products(service: RecordService = Depends(get_product_service)) -> list[dict]:
    """Return every product."""
    try:
        return await service.list_records()
    except Exception as e:
        logger.exception(f"Error listing products: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener productos")


@router.post(
    "",
    response_model=Product,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    request: Request,
    service: RecordService = Depends(get_product_service),
) -> dict:
    """Store a new product under a server-assigned id. The body may be empty."""
    try:
        fields = await read_record_fields(request, ProductFields)
        return await service.create_record(fields)
    except InvalidRecordBodyError:
        raise HTTPException(status_code=400, detail="Cuerpo de la petición no válido")
    except Exception as e:
        logger.exception(f"Error creating product: {e}")
        raise HTTPException(status_code=500, detail="Error al agregar producto")


@router.put("/{product_id}", response_model=Product, response_model_exclude_unset=True)
async def update_product(
    product_id: str,
    request: Request,
    service: RecordService = Depends(get_product_service),
) -> dict:
    """
    Overwrite the fields present in the body and return the updated product.

    Fields missing from the body keep their stored values. The id is checked
    before the body is read.
    """
    try:
        service.validate_id(product_id)
        fields = await read_record_fields(request, ProductFields)
        return await service.update_record(product_id, fields)
    except InvalidRecordIdError:
        raise HTTPException(status_code=400, detail="ID no válido")
    except InvalidRecordBodyError:
        raise HTTPException(status_code=400, detail="Cuerpo de la petición no válido")
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Producto no encontrado")
    except Exception as e:
        logger.exception(f"Error updating product {product_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al actualizar el producto")


@router.delete("/{product_id}", response_class=PlainTextResponse)
async def delete_product(
    product_id: str,
    service: RecordService = Depends(get_product_service),
) -> str:
    """Remove a product."""
    try:
        await service.delete_record(product_id)
    except InvalidRecordIdError:
        raise HTTPException(status_code=400, detail="ID no válido")
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Producto no encontrado")
    except Exception as e:
        logger.exception(f"Error deleting product {product_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al eliminar el producto")

    return "Producto eliminado correctamente"
