from typing import Any, BinaryIO, Dict, Optional, Tuple
import logging

from bson import Binary

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from repositories.base import BaseRepository

logger = logging.getLogger("shoppinglist.images")

_GENERIC_CONTENT_TYPES = {"", "application/octet-stream"}


class ImageService:
    """Attach and serve the single photo embedded in a product document.

    The image lives inside the product record, so deleting the product
    reclaims it with no separate cleanup. Re-attaching replaces the stored
    image wholesale.
    """

    @staticmethod
    def normalize_content_type(content_type: Optional[str]) -> str:
        """Strip parameters and case; fall back to the configured default."""
        ct = (content_type or "").split(";", 1)[0].strip().lower()
        if ct in _GENERIC_CONTENT_TYPES:
            return settings.image_default_content_type
        return ct

    @staticmethod
    def read_upload(stream: BinaryIO) -> bytes:
        """Read an upload stream, stopping one byte past the size limit.

        An oversized body is never buffered whole; the extra byte is enough
        for validate_upload to reject it.
        """
        return stream.read(settings.image_max_bytes + 1)

    @staticmethod
    def validate_upload(content: Optional[bytes], content_type: Optional[str]) -> str:
        """
        Check an uploaded image before anything touches the store.

        Returns:
            The normalized content type to store alongside the bytes

        Raises:
            ServiceValidationError: If the upload is missing, empty, too large
                or of a type that is not accepted
        """
        if not content:
            raise ServiceValidationError("No image file uploaded", code="IMAGE_MISSING")

        if len(content) > settings.image_max_bytes:
            raise ServiceValidationError(
                f"Image exceeds {settings.image_max_bytes} bytes",
                details={"size": len(content), "limit": settings.image_max_bytes},
                code="IMAGE_TOO_LARGE",
            )

        ct = ImageService.normalize_content_type(content_type)
        if ct not in settings.image_allowed_content_types:
            raise ServiceValidationError(
                f"Unsupported image type: {ct}",
                details={"allowed": settings.image_allowed_content_types},
                code="IMAGE_TYPE_UNSUPPORTED",
            )
        return ct

    @staticmethod
    def attach_image(
        repo: BaseRepository,
        product_id: str,
        content: Optional[bytes],
        content_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Store ``content`` as the product's image, replacing any previous one.

        The blob and its content type are written in one update so a reader
        never sees one without the other.

        Raises:
            ServiceValidationError: If the upload is rejected
            NotFoundError: If the product does not exist
        """
        ct = ImageService.validate_upload(content, content_type)

        if not repo.exists(product_id):
            raise NotFoundError(f"Product not found: {product_id}")

        product = repo.update(
            product_id,
            {
                "image": Binary(content),
                "imageContentType": ct,
            },
        )
        if product is None:
            raise NotFoundError(f"Product not found: {product_id}")

        logger.info("Image attached to %s (%d bytes, %s)", product_id, len(content), ct)
        return product

    @staticmethod
    def get_image(repo: BaseRepository, product_id: str) -> Tuple[bytes, str]:
        """
        Fetch the stored image.

        Returns:
            (bytes, content_type)

        Raises:
            NotFoundError: If the product does not exist or holds no image
        """
        product = repo.get_by_id(product_id, with_image=True)
        if product is None or not product.get("image"):
            raise NotFoundError(f"No image for product: {product_id}")

        content_type = product.get("imageContentType") or settings.image_default_content_type
        return bytes(product["image"]), content_type
