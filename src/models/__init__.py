"""Data models module."""

from src.models.product import Product, ProductFields
from src.models.user import User, UserFields

__all__ = ["Product", "ProductFields", "User", "UserFields"]
