"""Product list routes"""

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from typing import List, Optional
import logging

from api.dependencies import get_product_repository
from api.responses import ErrorResponse
from domain.mappers import ProductMapper
from domain.schemas.product_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
)
from repositories.base import BaseRepository
from services.product_service import ProductService
from services.image_service import ImageService

router = APIRouter(prefix="/products", tags=["Products"])
logger = logging.getLogger("shoppinglist.api.products")

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}
_INVALID = {400: {"model": ErrorResponse, "description": "Invalid payload"}}


@router.get("", response_model=List[ProductResponse])
def list_products(repo: BaseRepository = Depends(get_product_repository)):
    """Return every product on the list"""
    products = ProductService.list_products(repo)
    return ProductMapper.to_response_list(products)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
)
def create_product(
    payload: ProductCreate, repo: BaseRepository = Depends(get_product_repository)
):
    """
    Add a product.

    `name`, `amount` and `category` are required. `dateAdded` defaults to
    now, `marked` to false and `comments` to an empty string. Any `_id` or
    `id` in the body is ignored.
    """
    product = ProductService.create_product(repo, payload)
    return ProductMapper.to_response(product)


@router.get("/{product_id}", response_model=ProductResponse, responses=_NOT_FOUND)
def get_product(product_id: str, repo: BaseRepository = Depends(get_product_repository)):
    """Get a single product"""
    product = ProductService.get_product(repo, product_id)
    return ProductMapper.to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_NOT_FOUND, **_INVALID},
)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    repo: BaseRepository = Depends(get_product_repository),
):
    """
    Update a product.

    Only the fields present in the body change. `marked` is ignored here;
    use the toggle endpoint.
    """
    product = ProductService.update_product(repo, product_id, payload)
    return ProductMapper.to_response(product)


@router.delete("/{product_id}", responses=_NOT_FOUND)
def delete_product(product_id: str, repo: BaseRepository = Depends(get_product_repository)):
    """Delete a product. Deleting an already-deleted product is a 404."""
    ProductService.delete_product(repo, product_id)
    return {"success": True, "deleted": product_id}


@router.put(
    "/{product_id}/toggle-marked",
    response_model=ProductResponse,
    responses=_NOT_FOUND,
)
def toggle_marked(product_id: str, repo: BaseRepository = Depends(get_product_repository)):
    """Flip the product's marked flag"""
    product = ProductService.toggle_marked(repo, product_id)
    return ProductMapper.to_response(product)


@router.post(
    "/{product_id}/upload-image",
    response_model=ProductResponse,
    responses={**_NOT_FOUND, **_INVALID},
)
def upload_image(
    product_id: str,
    image: Optional[UploadFile] = File(default=None),
    repo: BaseRepository = Depends(get_product_repository),
):
    """
    Attach a photo to a product (multipart field `image`).

    Replaces any previous photo. The uploaded content type is kept and
    served back by `GET /products/{id}/image`.
    """
    content = ImageService.read_upload(image.file) if image is not None else None
    content_type = image.content_type if image is not None else None
    product = ImageService.attach_image(repo, product_id, content, content_type)
    return ProductMapper.to_response(product)


@router.get(
    "/{product_id}/image",
    response_class=Response,
    responses={
        200: {"content": {"image/*": {}}, "description": "The stored image"},
        **_NOT_FOUND,
    },
)
def get_image(product_id: str, repo: BaseRepository = Depends(get_product_repository)):
    """Return the product's photo with its stored content type"""
    content, content_type = ImageService.get_image(repo, product_id)
    return Response(content=content, media_type=content_type)
