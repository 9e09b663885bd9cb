"""Public product API endpoints."""

import math

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_search.api.schemas import Pagination, ProductResponse
from catalog_search.db import Product, get_db

router = APIRouter(prefix="/products", tags=["products"])


class ProductListResponse(BaseModel):
    """Page of products."""

    products: list[ProductResponse]
    pagination: Pagination


@router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = Query(None, description="Filter by category"),
    domain: str | None = Query(None, description="Filter by domain"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Products per page"),
    db: AsyncSession = Depends(get_db),
) -> ProductListResponse:
    """List active products, newest first."""
    conditions = [Product.active == True]  # noqa: E712
    if category:
        conditions.append(Product.category == category)
    if domain:
        conditions.append(Product.domain == domain)

    count_result = await db.execute(select(func.count(Product.id)).where(*conditions))
    total = count_result.scalar_one()

    result = await db.execute(
        select(Product)
        .where(*conditions)
        .order_by(desc(Product.created_at), Product.name)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    products = result.scalars().all()

    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in products],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )


@router.get("/{slug}", response_model=ProductResponse)
async def get_product(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> Product:
    """Get a product by slug for the detail page."""
    result = await db.execute(
        select(Product).where(Product.slug == slug, Product.active == True)  # noqa: E712
    )
    product = result.scalar_one_or_none()

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return product
