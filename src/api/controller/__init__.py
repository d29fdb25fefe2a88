"""API controllers."""

from src.api.controller.product_controller import router as product_router
from src.api.controller.user_controller import router as user_router

__all__ = ["product_router", "user_router"]
