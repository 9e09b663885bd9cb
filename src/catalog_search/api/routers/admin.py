"""Admin API endpoints for catalog management.

Endpoints:
- POST /admin/products - Create a product
- PUT /admin/products/{id} - Update a product
- DELETE /admin/products/{id} - Delete a product
- POST /admin/products/bulk - Import many products at once
- GET /admin/analytics - Search and catalog statistics

All endpoints require an admin bearer token. Every catalog change clears
the search result cache.
"""

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_search.api.deps import require_admin_session
from catalog_search.api.schemas import ProductCreate, ProductResponse, ProductUpdate
from catalog_search.db.base import get_db
from catalog_search.db.models import AdminSession, Product
from catalog_search.services.analytics import build_analytics_report
from catalog_search.services.catalog import slugify
from catalog_search.services.search_service import get_search_cache

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin_session)],
)

# Columns that can't be cleared with an explicit null
NON_NULLABLE_FIELDS = {
    "name",
    "description",
    "price",
    "currency",
    "gallery_images",
    "category",
    "domain",
    "tags",
    "features",
    "specifications",
    "active",
}


class DeleteResponse(BaseModel):
    """Response from deleting a product."""

    success: bool
    message: str


class BulkImportRequest(BaseModel):
    """Request to import many products."""

    products: list[dict[str, Any]] = Field(..., description="Product payloads (ProductCreate)")


class BulkImportError(BaseModel):
    """One product that failed to import."""

    index: int
    product: str
    error: str


class BulkImportResponse(BaseModel):
    """Response from a bulk import."""

    success: int = 0
    failed: int = 0
    errors: list[BulkImportError] = []


class AnalyticsResponse(BaseModel):
    """Search and catalog statistics."""

    period_days: int
    top_searches: list[dict[str, Any]]
    search_trends: list[dict[str, Any]]
    category_stats: list[dict[str, Any]]
    product_stats: dict[str, int]


async def _slug_exists(db: AsyncSession, slug: str) -> bool:
    result = await db.execute(select(Product.id).where(Product.slug == slug))
    return result.scalar_one_or_none() is not None


async def _insert_product(db: AsyncSession, product_data: ProductCreate) -> Product:
    """Insert a validated product, rejecting duplicate slugs with 400."""
    slug = product_data.slug or slugify(product_data.name)
    if await _slug_exists(db, slug):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product with this slug already exists",
        )

    values = product_data.model_dump(exclude={"slug"})
    values["tags"] = [tag for tag in values["tags"] if tag]
    values["features"] = [feature for feature in values["features"] if feature]
    product = Product(slug=slug, **values)
    db.add(product)
    await db.flush()
    await db.refresh(product)
    return product


async def _get_product_or_404(db: AsyncSession, product_id: UUID) -> Product:
    result = await db.execute(select(Product).where(Product.id == product_id))
    product = result.scalar_one_or_none()
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    db: AsyncSession = Depends(get_db),
    admin: AdminSession = Depends(require_admin_session),
) -> Product:
    """Create a new product."""
    product = await _insert_product(db, product_data)
    get_search_cache().clear()
    logger.info(f"Admin {admin.user.username} created product {product.slug}")
    return product


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    product_data: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AdminSession = Depends(require_admin_session),
) -> Product:
    """Update the fields present in the request body."""
    product = await _get_product_or_404(db, product_id)

    for field_name, value in product_data.model_dump(exclude_unset=True).items():
        if value is None and field_name in NON_NULLABLE_FIELDS:
            continue
        setattr(product, field_name, value)

    await db.flush()
    await db.refresh(product)
    get_search_cache().clear()
    logger.info(f"Admin {admin.user.username} updated product {product.slug}")
    return product


@router.delete("/products/{product_id}", response_model=DeleteResponse)
async def delete_product(
    product_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminSession = Depends(require_admin_session),
) -> DeleteResponse:
    """Delete a product."""
    product = await _get_product_or_404(db, product_id)
    slug = product.slug

    await db.delete(product)
    await db.flush()
    get_search_cache().clear()
    logger.info(f"Admin {admin.user.username} deleted product {slug}")
    return DeleteResponse(success=True, message="Product deleted successfully")


@router.post("/products/bulk", response_model=BulkImportResponse)
async def bulk_import_products(
    request: BulkImportRequest,
    db: AsyncSession = Depends(get_db),
) -> BulkImportResponse:
    """Import products one by one, collecting per-item errors."""
    response = BulkImportResponse()

    for index, payload in enumerate(request.products):
        label = str(payload.get("name") or "Unknown")
        try:
            product_data = ProductCreate.model_validate(payload)
            await _insert_product(db, product_data)
            response.success += 1
        except ValidationError as e:
            response.failed += 1
            response.errors.append(
                BulkImportError(index=index, product=label, error=str(e.errors()[0]["msg"]))
            )
        except HTTPException as e:
            response.failed += 1
            response.errors.append(BulkImportError(index=index, product=label, error=e.detail))

    if response.success:
        get_search_cache().clear()
    logger.info(f"Bulk import: {response.success} imported, {response.failed} failed")
    return response


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    days: int = Query(30, ge=1, le=365, description="Look-back window in days"),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Top searches, search trends, category popularity and product counts."""
    return await build_analytics_report(db, days)
