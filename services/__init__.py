"""Services package - Business logic layer"""

from services.product_service import ProductService
from services.image_service import ImageService

__all__ = [
    "ProductService",
    "ImageService",
]
