"""
Product domain mapper.
Handles transformation between stored documents and product DTOs.
"""

from typing import Any, Dict, List

from app.config import settings
from domain.schemas.product_schemas import ProductResponse


class ProductMapper:
    """Mapper for product document transformations."""

    @staticmethod
    def image_url(product_id: str) -> str:
        return f"{settings.api_prefix}/products/{product_id}/image"

    @staticmethod
    def to_response(document: Dict[str, Any]) -> ProductResponse:
        """
        Convert a stored product document to ProductResponse DTO.

        Documents written by earlier revisions may lack ``category``,
        ``marked`` or ``comments`` and may carry a numeric ``id`` field or a
        stored ``imageUrl``. The store key is the only identifier exposed.
        ``imageUrl`` is derived from the key under the current API prefix and
        only emitted for documents holding an embedded image.

        Args:
            document: Product document as read from the store

        Returns:
            ProductResponse DTO
        """
        product_id = str(document["_id"])
        has_image = bool(document.get("imageContentType"))
        return ProductResponse(
            id=product_id,
            name=document.get("name"),
            amount=document.get("amount"),
            category=document.get("category"),
            date_added=document.get("dateAdded"),
            marked=bool(document.get("marked", False)),
            comments=document.get("comments") or "",
            image_url=ProductMapper.image_url(product_id) if has_image else None,
        )

    @staticmethod
    def to_response_list(documents: List[Dict[str, Any]]) -> List[ProductResponse]:
        return [ProductMapper.to_response(d) for d in documents]
