"""
Product Repository - Data access layer for product records (MongoDB)
"""

from typing import List, Optional
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from repositories.base import BaseRepository, Document
from app.exceptions import StoreError

_WITHOUT_IMAGE = {"image": 0}


def parse_key(key) -> Optional[ObjectId]:
    """Convert a key to ObjectId; None when it cannot name any document."""
    if isinstance(key, ObjectId):
        return key
    try:
        return ObjectId(str(key))
    except (InvalidId, TypeError):
        return None


class ProductRepository(BaseRepository):
    """
    Repository for product documents.
    Wraps a pymongo collection obtained once from mongo_adapter.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def _fail(self, operation: str, key) -> StoreError:
        return StoreError(operation, None if key is None else str(key))

    def get_all(self) -> List[Document]:
        try:
            return list(self.collection.find({}, _WITHOUT_IMAGE))
        except PyMongoError as exc:
            raise self._fail("find_all", None) from exc

    def get_by_id(self, key: str, with_image: bool = False) -> Optional[Document]:
        oid = parse_key(key)
        if oid is None:
            return None
        projection = None if with_image else _WITHOUT_IMAGE
        try:
            return self.collection.find_one({"_id": oid}, projection)
        except PyMongoError as exc:
            raise self._fail("find_by_key", key) from exc

    def create(self, document: Document) -> Document:
        doc = dict(document)
        # The store assigns the key; anything supplied by the caller is dropped.
        doc.pop("_id", None)
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as exc:
            raise self._fail("insert", None) from exc
        doc["_id"] = result.inserted_id
        return doc

    def update(self, key: str, changes: Document) -> Optional[Document]:
        oid = parse_key(key)
        if oid is None:
            return None
        fields = {k: v for k, v in changes.items() if k != "_id"}
        if not fields:
            return self.get_by_id(key)
        try:
            return self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": fields},
                projection=_WITHOUT_IMAGE,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            raise self._fail("update_by_key", key) from exc

    def delete(self, key: str) -> bool:
        oid = parse_key(key)
        if oid is None:
            return False
        try:
            result = self.collection.delete_one({"_id": oid})
        except PyMongoError as exc:
            raise self._fail("delete_by_key", key) from exc
        return result.deleted_count > 0
