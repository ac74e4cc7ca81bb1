"""
API dependencies for dependency injection
"""

from adapters import mongo_adapter
from app.exceptions import StoreError
from repositories import ProductRepository


def get_product_repository() -> ProductRepository:
    """
    Product repository dependency for FastAPI routes.

    Wraps the process-wide collection opened at startup; no connection is
    opened per request. Without a connection the request fails as a store
    error (500) rather than an unexpected one.

    Usage:
        @router.get("/example")
        def example(repo: ProductRepository = Depends(get_product_repository)):
            # Use repo here
            pass
    """
    if not mongo_adapter.is_connected():
        raise StoreError("connect")
    return ProductRepository(mongo_adapter.get_collection())
