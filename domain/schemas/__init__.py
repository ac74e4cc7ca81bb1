"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.product_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)

__all__ = [
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
]
