"""
Tests for ProductRepository against a mocked pymongo collection.

Verifies the MongoDB access pattern:
- lookups by ObjectId, malformed keys resolve to "not found"
- updates are $set merges, never whole-document replaces
- image blobs are projected out unless requested
- driver failures surface as StoreError
"""

import pytest
from unittest.mock import MagicMock
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import AutoReconnect, PyMongoError

from repositories import ProductRepository
from app.exceptions import StoreError


@pytest.fixture
def collection():
    return MagicMock()


@pytest.fixture
def product_repo(collection):
    return ProductRepository(collection)


def test_get_all_excludes_image(product_repo, collection):
    collection.find.return_value = iter([{"_id": ObjectId(), "name": "Milk"}])

    products = product_repo.get_all()

    assert len(products) == 1
    collection.find.assert_called_once_with({}, {"image": 0})


def test_get_by_id_uses_object_id(product_repo, collection):
    oid = ObjectId()
    collection.find_one.return_value = {"_id": oid, "name": "Milk"}

    product = product_repo.get_by_id(str(oid))

    assert product["_id"] == oid
    collection.find_one.assert_called_once_with({"_id": oid}, {"image": 0})


def test_get_by_id_with_image_has_no_projection(product_repo, collection):
    oid = ObjectId()

    product_repo.get_by_id(str(oid), with_image=True)

    collection.find_one.assert_called_once_with({"_id": oid}, None)


@pytest.mark.parametrize("key", ["42", "not-an-id", "", None])
def test_malformed_keys_are_not_found(product_repo, collection, key):
    assert product_repo.get_by_id(key) is None
    assert product_repo.update(key, {"name": "x"}) is None
    assert product_repo.delete(key) is False
    collection.find_one.assert_not_called()
    collection.find_one_and_update.assert_not_called()
    collection.delete_one.assert_not_called()


def test_create_drops_client_key(product_repo, collection):
    """The store assigns the key even when the caller supplies one"""
    new_id = ObjectId()
    sent = []

    def insert_one(document):
        sent.append(dict(document))
        return MagicMock(inserted_id=new_id)

    collection.insert_one.side_effect = insert_one

    product = product_repo.create({"_id": "mine", "name": "Milk"})

    assert sent == [{"name": "Milk"}]
    assert product["_id"] == new_id
    assert product["name"] == "Milk"


def test_update_is_field_level_set(product_repo, collection):
    oid = ObjectId()
    collection.find_one_and_update.return_value = {"_id": oid, "comments": "x"}

    result = product_repo.update(str(oid), {"comments": "x", "_id": ObjectId()})

    assert result["comments"] == "x"
    collection.find_one_and_update.assert_called_once_with(
        {"_id": oid},
        {"$set": {"comments": "x"}},
        projection={"image": 0},
        return_document=ReturnDocument.AFTER,
    )
    collection.replace_one.assert_not_called()
    collection.update_one.assert_not_called()


def test_update_not_found(product_repo, collection):
    collection.find_one_and_update.return_value = None

    assert product_repo.update(str(ObjectId()), {"marked": True}) is None


def test_delete_reports_deleted_count(product_repo, collection):
    collection.delete_one.return_value = MagicMock(deleted_count=1)
    assert product_repo.delete(str(ObjectId())) is True

    collection.delete_one.return_value = MagicMock(deleted_count=0)
    assert product_repo.delete(str(ObjectId())) is False


@pytest.mark.parametrize(
    "method,args,driver_call",
    [
        ("get_all", (), "find"),
        ("get_by_id", (str(ObjectId()),), "find_one"),
        ("create", ({"name": "Milk"},), "insert_one"),
        ("update", (str(ObjectId()), {"name": "Milk"}), "find_one_and_update"),
        ("delete", (str(ObjectId()),), "delete_one"),
    ],
)
def test_driver_errors_become_store_errors(product_repo, collection, method, args, driver_call):
    getattr(collection, driver_call).side_effect = AutoReconnect("connection reset")

    with pytest.raises(StoreError) as exc_info:
        getattr(product_repo, method)(*args)

    assert isinstance(exc_info.value.__cause__, PyMongoError)
    assert exc_info.value.operation
