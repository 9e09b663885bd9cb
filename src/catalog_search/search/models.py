"""Data models for relevance search."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

IN_STOCK = "In Stock"
MADE_TO_ORDER = "Made to Order"


class Product(BaseModel):
    """Read-only product record fed to the scorer."""

    # Identification
    id: str = Field(..., description="Unique product identifier (catalog slug or number)")
    name: str = Field(..., min_length=1, description="Product name")
    description: str = Field(..., min_length=1, description="Product description")

    # Classification
    category: str = Field("", description="Category name")
    domain: str = Field("", description="Domain (top-level grouping) name")
    tags: list[str] = Field(default_factory=list, description="Search tags")
    specifications: dict[str, Any] = Field(
        default_factory=dict, description="Specification name -> value"
    )
    features: list[str] = Field(default_factory=list, description="Feature bullet points")

    # Popularity
    rating: Optional[float] = Field(None, ge=0, le=5, description="Average rating (0-5)")
    availability: Optional[str] = Field(None, description="In Stock, Made to Order, ...")

    # Carried for callers that re-sort results; never scored
    price: Optional[float] = Field(None, ge=0, description="Unit price")
    created_at: Optional[datetime] = Field(None, description="When the product was listed")

    @field_validator("id", mode="before")
    @classmethod
    def _int_id_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("category", "domain", mode="before")
    @classmethod
    def _none_to_empty_str(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", "features", "specifications", mode="before")
    @classmethod
    def _none_to_empty_collection(cls, value: Any, info) -> Any:
        if value is None:
            return {} if info.field_name == "specifications" else []
        return value


class ScoredResult(Product):
    """Product annotated with its relevance for one query."""

    relevance_score: int = Field(..., gt=0, description="Weighted relevance score")
    matched_fields: list[str] = Field(
        default_factory=list,
        description="Fields containing a query word verbatim (display only)",
    )


class RelevanceWeights(BaseModel):
    """Weight table for relevance scoring.

    The defaults are the canonical table. Rebalancing it is a versioned
    change: bump ``version`` together with the numbers.
    """

    version: str = "1"

    # Whole query as one unit
    query_in_name: int = 100
    query_in_id: int = 90
    query_in_description: int = 80

    # Per query word
    word_in_name: int = 50
    word_in_tag: int = 30
    word_fuzzy_tag: int = 15
    word_in_category: int = 40
    word_in_domain: int = 35
    word_in_description: int = 25
    word_in_spec_key: int = 20
    word_in_spec_value: int = 15
    word_in_feature: int = 20
    word_fuzzy_name: int = 10
    word_fuzzy_description: int = 5

    # Popularity boosts (once per product)
    high_rating_threshold: float = 4.5
    high_rating_boost: int = 10
    in_stock_boost: int = 5
