"""Pydantic schemas for product records."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, field_validator
from typing import Any, Dict, Optional, Union
from datetime import datetime, timezone

Amount = Union[StrictInt, StrictFloat]


class ProductCreate(BaseModel):
    """Payload for adding a product to the list.

    Any client-supplied identifier (``_id`` or the legacy numeric ``id``) is
    ignored; the store assigns the key.
    """

    name: str = Field(..., min_length=1, description="Product name")
    amount: Amount = Field(..., description="Quantity to buy")
    category: str = Field(..., min_length=1, description="Shelf / aisle category")
    date_added: Optional[datetime] = Field(
        None, alias="dateAdded", description="Defaults to the creation time"
    )
    marked: StrictBool = Field(default=False, description="Initial marked state")
    comments: str = Field(default="", description="Free-form notes")

    model_config = ConfigDict(
        populate_by_name=True, str_strip_whitespace=True, extra="ignore"
    )

    def to_document(self) -> Dict[str, Any]:
        """Build the stored document with defaults applied."""
        return {
            "name": self.name,
            "amount": self.amount,
            "category": self.category,
            "dateAdded": self.date_added or datetime.now(timezone.utc),
            "marked": self.marked,
            "comments": self.comments,
        }


class ProductUpdate(BaseModel):
    """Partial update of a product.

    Only fields present in the request are written. ``marked`` is not
    accepted here; it changes only through the toggle endpoint.
    """

    name: Optional[str] = Field(None, min_length=1)
    amount: Optional[Amount] = None
    category: Optional[str] = Field(None, min_length=1)
    date_added: Optional[datetime] = Field(None, alias="dateAdded")
    comments: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True, str_strip_whitespace=True, extra="ignore"
    )

    @field_validator("name", "amount", "category", "date_added", "comments", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} may not be null")
        return v

    def to_changes(self) -> Dict[str, Any]:
        """Fields explicitly supplied by the client, keyed by stored name."""
        return self.model_dump(exclude_unset=True, by_alias=True)


class ProductResponse(BaseModel):
    """Product as returned to clients. Image bytes are served separately."""

    id: str = Field(..., alias="_id")
    name: Optional[str] = None
    amount: Optional[Union[int, float]] = None
    category: Optional[str] = None
    date_added: Optional[datetime] = Field(None, alias="dateAdded")
    marked: bool = False
    comments: str = ""
    image_url: Optional[str] = Field(None, alias="imageUrl")

    model_config = ConfigDict(populate_by_name=True)
