"""
Domain layer - Product schemas and mappers.
"""

from domain import mappers, schemas

__all__ = ["mappers", "schemas"]
