"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.product_repository import ProductRepository

__all__ = [
    "BaseRepository",
    "ProductRepository",
]
