"""Product schemas shared by the public and admin routers."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class ProductResponse(BaseModel):
    """Product response schema."""

    id: UUID
    slug: str
    name: str
    description: str
    price: Decimal
    currency: str
    image_data: str | None
    gallery_images: list[str]
    product_url: str | None
    category: str
    domain: str
    tags: list[str]
    features: list[str]
    specifications: dict[str, Any]
    rating: float | None
    availability: str | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    """Product creation schema (admin use)."""

    slug: str | None = Field(None, description="Derived from the name when omitted")
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    image_data: str | None = None
    gallery_images: list[str] = []
    product_url: str | None = None
    category: str = ""
    domain: str = ""
    tags: list[str] = []
    features: list[str] = []
    specifications: dict[str, Any] = {}
    rating: float | None = Field(None, ge=0, le=5)
    availability: str | None = None


class ProductUpdate(BaseModel):
    """Partial product update; only fields that are sent change."""

    name: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    price: Decimal | None = Field(None, ge=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    image_data: str | None = None
    gallery_images: list[str] | None = None
    product_url: str | None = None
    category: str | None = None
    domain: str | None = None
    tags: list[str] | None = None
    features: list[str] | None = None
    specifications: dict[str, Any] | None = None
    rating: float | None = Field(None, ge=0, le=5)
    availability: str | None = None
    active: bool | None = None


class Pagination(BaseModel):
    """Pagination metadata."""

    page: int
    limit: int
    total: int
    pages: int
