"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Dict, List, Optional
from abc import ABC, abstractmethod

Document = Dict[str, Any]


class BaseRepository(ABC):
    """
    Base repository for a single document collection.

    Lookups use the store-assigned key. Every method is atomic with respect
    to one document, and "not found" is reported through the return value
    (None / False) rather than an exception.
    """

    @abstractmethod
    def get_all(self) -> List[Document]:
        """Get all documents in store order"""

    @abstractmethod
    def get_by_id(self, key: str, with_image: bool = False) -> Optional[Document]:
        """
        Get document by key.

        Args:
            key: Store-assigned key as a string
            with_image: Include the embedded image blob

        Returns:
            Document or None if not found
        """

    @abstractmethod
    def create(self, document: Document) -> Document:
        """Insert a new document; the store assigns its key"""

    @abstractmethod
    def update(self, key: str, changes: Document) -> Optional[Document]:
        """
        Merge ``changes`` into the stored document.

        Only the supplied fields are written; everything else is left as
        stored. Returns the updated document, or None if not found.
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete document by key; False if nothing was deleted"""

    def exists(self, key: str) -> bool:
        """Check if document exists"""
        return self.get_by_id(key) is not None
