"""API routes package"""

from . import health, products

__all__ = ["health", "products"]
