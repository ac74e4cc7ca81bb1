"""
Domain mappers package.
Handles transformation between stored documents and DTOs (Data Transfer Objects).
"""

from domain.mappers.product_mapper import ProductMapper

__all__ = ["ProductMapper"]
