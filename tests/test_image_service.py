"""
Tests for the image attachment policy (ImageService).
"""

import io

import pytest
from bson import ObjectId

from test_fixtures import repo, product_payload, PNG_BYTES, JPEG_BYTES
from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.mappers import ProductMapper
from domain.schemas.product_schemas import ProductCreate
from services.image_service import ImageService
from services.product_service import ProductService


@pytest.fixture
def product(repo):
    return ProductService.create_product(
        repo, ProductCreate.model_validate(product_payload())
    )


def test_attach_then_fetch_returns_same_bytes(repo, product):
    pid = str(product["_id"])

    updated = ImageService.attach_image(repo, pid, PNG_BYTES, "image/png")
    content, content_type = ImageService.get_image(repo, pid)

    assert content == PNG_BYTES
    assert content_type == "image/png"
    assert "imageUrl" not in updated
    assert ProductMapper.to_response(updated).image_url == f"{settings.api_prefix}/products/{pid}/image"


def test_second_attach_replaces_first(repo, product):
    """Last write wins; the first image is never served again"""
    pid = str(product["_id"])

    ImageService.attach_image(repo, pid, PNG_BYTES, "image/png")
    ImageService.attach_image(repo, pid, JPEG_BYTES, "image/jpeg")
    content, content_type = ImageService.get_image(repo, pid)

    assert content == JPEG_BYTES
    assert content_type == "image/jpeg"


def test_attach_leaves_record_fields_untouched(repo, product):
    pid = str(product["_id"])
    ProductService.toggle_marked(repo, pid)

    updated = ImageService.attach_image(repo, pid, PNG_BYTES, "image/png")

    assert updated["name"] == "Milk"
    assert updated["marked"] is True
    assert "image" not in updated


def test_attach_image_missing_product(repo):
    with pytest.raises(NotFoundError):
        ImageService.attach_image(repo, str(ObjectId()), PNG_BYTES, "image/png")


@pytest.mark.parametrize("content", [None, b""])
def test_attach_rejects_missing_content(repo, product, content):
    with pytest.raises(ServiceValidationError) as exc_info:
        ImageService.attach_image(repo, str(product["_id"]), content, "image/png")

    assert exc_info.value.code == "IMAGE_MISSING"
    with pytest.raises(NotFoundError):
        ImageService.get_image(repo, str(product["_id"]))


def test_attach_rejects_oversized_image(repo, product, monkeypatch):
    monkeypatch.setattr(settings, "image_max_bytes", 16)

    with pytest.raises(ServiceValidationError) as exc_info:
        ImageService.attach_image(repo, str(product["_id"]), PNG_BYTES, "image/png")

    assert exc_info.value.code == "IMAGE_TOO_LARGE"


def test_read_upload_stops_past_limit(monkeypatch):
    """An oversized upload is read only one byte past the limit, then rejected"""
    monkeypatch.setattr(settings, "image_max_bytes", 16)
    stream = io.BytesIO(PNG_BYTES * 1000)

    content = ImageService.read_upload(stream)

    assert len(content) == 17
    assert stream.tell() == 17
    with pytest.raises(ServiceValidationError) as exc_info:
        ImageService.validate_upload(content, "image/png")
    assert exc_info.value.code == "IMAGE_TOO_LARGE"


def test_read_upload_within_limit_reads_everything():
    stream = io.BytesIO(PNG_BYTES)

    assert ImageService.read_upload(stream) == PNG_BYTES


def test_attach_rejects_unsupported_type(repo, product):
    with pytest.raises(ServiceValidationError) as exc_info:
        ImageService.attach_image(repo, str(product["_id"]), b"%PDF-1.7", "application/pdf")

    assert exc_info.value.code == "IMAGE_TYPE_UNSUPPORTED"


@pytest.mark.parametrize(
    "declared,expected",
    [
        ("image/PNG", "image/png"),
        ("image/png; charset=binary", "image/png"),
        (None, "image/jpeg"),
        ("application/octet-stream", "image/jpeg"),
    ],
)
def test_content_type_normalization(declared, expected):
    assert ImageService.normalize_content_type(declared) == expected


def test_fetch_image_when_none_attached(repo, product):
    with pytest.raises(NotFoundError):
        ImageService.get_image(repo, str(product["_id"]))


def test_fetch_image_missing_product(repo):
    with pytest.raises(NotFoundError):
        ImageService.get_image(repo, str(ObjectId()))


def test_delete_reclaims_image(repo, product):
    pid = str(product["_id"])
    ImageService.attach_image(repo, pid, PNG_BYTES, "image/png")

    ProductService.delete_product(repo, pid)

    with pytest.raises(NotFoundError):
        ImageService.get_image(repo, pid)
    with pytest.raises(NotFoundError):
        ImageService.attach_image(repo, pid, PNG_BYTES, "image/png")
    assert repo.documents == {}


def test_image_url_only_exposed_with_embedded_image(repo):
    """A legacy disk-path imageUrl without an embedded image is not exposed"""
    legacy = repo.create(
        {"name": "Cheese", "amount": 1, "category": "Dairy", "imageUrl": "/uploads/cheese.jpg"}
    )

    response = ProductMapper.to_response(legacy)

    assert response.image_url is None


def test_image_url_follows_current_prefix(repo, product, monkeypatch):
    """The URL is derived on read, so a prefix change applies to old uploads"""
    pid = str(product["_id"])
    ImageService.attach_image(repo, pid, PNG_BYTES, "image/png")

    monkeypatch.setattr(settings, "api_prefix", "/api/v2")
    response = ProductMapper.to_response(repo.get_by_id(pid))

    assert response.image_url == f"/api/v2/products/{pid}/image"
