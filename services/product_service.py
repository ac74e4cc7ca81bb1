from typing import Any, Dict, List
import logging

from domain.schemas.product_schemas import ProductCreate, ProductUpdate
from repositories.base import BaseRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("shoppinglist.products")


class ProductService:
    """Lifecycle operations for shopping-list products.

    A product is either stored (active) or gone; deletion is terminal and the
    store never hands out a deleted key again. Every operation takes the
    repository explicitly so callers decide which store backs it.
    """

    @staticmethod
    def list_products(repo: BaseRepository) -> List[Dict[str, Any]]:
        return repo.get_all()

    @staticmethod
    def get_product(repo: BaseRepository, product_id: str) -> Dict[str, Any]:
        product = repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product not found: {product_id}")
        return product

    @staticmethod
    def create_product(repo: BaseRepository, payload: ProductCreate) -> Dict[str, Any]:
        """
        Store a new product.

        Defaults (``dateAdded`` = now, ``marked`` = False, ``comments`` = "")
        are applied before the insert; the store assigns the key.

        Returns:
            The stored document, including its ``_id``
        """
        product = repo.create(payload.to_document())
        logger.info("Product created: %s (%s)", product["_id"], product["name"])
        return product

    @staticmethod
    def update_product(
        repo: BaseRepository, product_id: str, payload: ProductUpdate
    ) -> Dict[str, Any]:
        """
        Merge the supplied fields into an existing product.

        Fields absent from the payload keep their stored values. An empty
        payload is a no-op that still requires the product to exist.

        Raises:
            NotFoundError: If the product does not exist
        """
        changes = payload.to_changes()
        if not changes:
            return ProductService.get_product(repo, product_id)

        product = repo.update(product_id, changes)
        if product is None:
            raise NotFoundError(f"Product not found: {product_id}")
        logger.info("Product updated: %s fields=%s", product_id, sorted(changes))
        return product

    @staticmethod
    def toggle_marked(repo: BaseRepository, product_id: str) -> Dict[str, Any]:
        """
        Flip ``marked`` based on its stored value.

        The client never chooses the target value. Concurrent toggles on the
        same product are last-write-wins.

        Raises:
            NotFoundError: If the product does not exist
        """
        current = repo.get_by_id(product_id)
        if current is None:
            raise NotFoundError(f"Product not found: {product_id}")

        marked = not bool(current.get("marked", False))
        product = repo.update(product_id, {"marked": marked})
        if product is None:
            # deleted between the read and the write
            raise NotFoundError(f"Product not found: {product_id}")
        logger.info("Product %s marked=%s", product_id, marked)
        return product

    @staticmethod
    def delete_product(repo: BaseRepository, product_id: str) -> None:
        """
        Remove a product and its embedded image.

        Raises:
            NotFoundError: If the product does not exist, including when it
                was already deleted
        """
        if not repo.delete(product_id):
            raise NotFoundError(f"Product not found: {product_id}")
        logger.info("Product deleted: %s", product_id)
