"""Catalog records as delivered by the product-listing endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Rating(BaseModel):
    """Aggregate customer rating for a product."""
    model_config = ConfigDict(frozen=True)

    rate: float = Field(ge=0.0, le=5.0)
    count: int = Field(ge=0, strict=True)


class Product(BaseModel):
    """Immutable catalog product.

    The wire format names the picture URL ``image``; the model exposes it as
    ``image_url`` and accepts either name on construction.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(strict=True)
    title: str
    price: float = Field(ge=0.0)
    description: str
    category: str
    image_url: str = Field(alias="image")
    rating: Rating

    def matches_search(self, needle: str) -> bool:
        """Case-insensitive substring match on title or description."""
        if not needle:
            return True
        needle = needle.lower()
        return needle in self.title.lower() or needle in self.description.lower()
