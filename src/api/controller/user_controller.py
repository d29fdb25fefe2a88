"""REST controller for the user collection."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from src.api.dependencies import get_user_service
from src.api.request_body import InvalidRecordBodyError, read_record_fields
from src.models import User, UserFields
from src.services.record_service import (
    InvalidRecordIdError,
    RecordNotFoundError,
    RecordService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/usuarios", tags=["usuarios"])


@router.get("", response_model=list[User], response_model_exclude_unset=True)
async def list_users(service: RecordService = Depends(get_user_service)) -> list[dict]:
    """Return every user."""
    try:
        return await service.list_records()
    except Exception as e:
        logger.exception(f"Error listing users: {e}")
        raise HTTPException(status_code=500, detail="Error al obtener usuarios")


@router.post(
    "",
    response_model=User,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    request: Request,
    service: RecordService = Depends(get_user_service),
) -> dict:
    """Store a new user under a server-assigned id. The body may be empty."""
    try:
        fields = await read_record_fields(request, UserFields)
        return await service.create_record(fields)
    except InvalidRecordBodyError:
        raise HTTPException(status_code=400, detail="Cuerpo de la petición no válido")
    except Exception as e:
        logger.exception(f"Error creating user: {e}")
        raise HTTPException(status_code=500, detail="Error al agregar usuario")


@router.put("/{user_id}", response_model=User, response_model_exclude_unset=True)
async def update_user(
    user_id: str,
    request: Request,
    service: RecordService = Depends(get_user_service),
) -> dict:
    """
    Overwrite the fields present in the body and return the updated user.

    Fields missing from the body keep their stored values. The id is checked
    before the body is read.
    """
    try:
        service.validate_id(user_id)
        fields = await read_record_fields(request, UserFields)
        return await service.update_record(user_id, fields)
    except InvalidRecordIdError:
        raise HTTPException(status_code=400, detail="ID no válido")
    except InvalidRecordBodyError:
        raise HTTPException(status_code=400, detail="Cuerpo de la petición no válido")
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    except Exception as e:
        logger.exception(f"Error updating user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al actualizar el usuario")


@router.delete("/{user_id}", response_class=PlainTextResponse)
async def delete_user(
    user_id: str,
    service: RecordService = Depends(get_user_service),
) -> str:
    """Remove a user."""
    try:
        await service.delete_record(user_id)
    except InvalidRecordIdError:
        raise HTTPException(status_code=400, detail="ID no válido")
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    except Exception as e:
        logger.exception(f"Error deleting user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Error al eliminar el usuario")

    return "Usuario eliminado correctamente"
