"""Search API endpoints.

Endpoints:
- GET /search - relevance search with filters, sorting and pagination
- GET /search/suggestions - product name and category completions
- GET /categories - categories with product counts
- GET /domains - domains with product counts
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_search.api.schemas import Pagination, ProductResponse
from catalog_search.db.base import get_db
from catalog_search.db.models import Product
from catalog_search.services.analytics import DatabaseSearchAnalytics
from catalog_search.services.search_service import (
    SearchParams,
    SortBy,
    get_search_cache,
    run_search,
)

router = APIRouter(tags=["search"])


class SearchResultItem(ProductResponse):
    """Product plus its relevance (only when sorted by relevance)."""

    relevance_score: int | None = None
    matched_fields: list[str] | None = None


class SearchFilters(BaseModel):
    """Echo of the filters applied to a search."""

    query: str
    category: str | None
    domain: str | None
    min_price: float | None
    max_price: float | None
    sort_by: SortBy


class SearchResponse(BaseModel):
    """Search results page."""

    results: list[SearchResultItem]
    pagination: Pagination
    filters: SearchFilters


class Suggestion(BaseModel):
    """Autocomplete suggestion."""

    type: str
    text: str


class SuggestionsResponse(BaseModel):
    """Autocomplete suggestions."""

    suggestions: list[Suggestion]


class FacetCount(BaseModel):
    """A category or domain with its product count."""

    name: str
    product_count: int


@router.get("/search", response_model=SearchResponse)
async def search_products(
    q: str = Query("", description="Search query (empty = browse all)"),
    category: str | None = Query(None, description="Filter by category"),
    domain: str | None = Query(None, description="Filter by domain"),
    min_price: float | None = Query(None, ge=0, description="Minimum price"),
    max_price: float | None = Query(None, ge=0, description="Maximum price"),
    sort_by: SortBy = Query(SortBy.RELEVANCE, description="Sort mode"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Results per page"),
    db: AsyncSession = Depends(get_db),
) -> SearchResponse:
    """Search the catalog.

    With sort_by=relevance, results are ordered by relevance score and carry
    relevance_score and matched_fields. An empty query browses the catalog.
    """
    params = SearchParams(
        q=q,
        category=category,
        domain=domain,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )
    result_page = await run_search(
        db,
        params,
        cache=get_search_cache(),
        analytics=DatabaseSearchAnalytics(db),
    )

    items = []
    for hit in result_page.hits:
        item = SearchResultItem.model_validate(hit.row)
        item.relevance_score = hit.relevance_score
        item.matched_fields = hit.matched_fields
        items.append(item)

    return SearchResponse(
        results=items,
        pagination=Pagination(
            page=result_page.page,
            limit=result_page.limit,
            total=result_page.total,
            pages=result_page.pages,
        ),
        filters=SearchFilters(
            query=q,
            category=category,
            domain=domain,
            min_price=min_price,
            max_price=max_price,
            sort_by=sort_by,
        ),
    )


@router.get("/search/suggestions", response_model=SuggestionsResponse)
async def search_suggestions(
    q: str = Query("", description="Partial query"),
    limit: int = Query(10, ge=1, le=50, description="Maximum suggestions"),
    db: AsyncSession = Depends(get_db),
) -> SuggestionsResponse:
    """Suggest product names (prefix matches first) and categories."""
    query = q.strip()
    if not query:
        return SuggestionsResponse(suggestions=[])

    contains = f"%{query}%"

    # Product names starting with the query sort ahead of other matches
    name_result = await db.execute(
        select(Product.name)
        .where(Product.active == True, Product.name.ilike(contains))  # noqa: E712
        .distinct()
        .order_by(Product.name)
    )
    names = list(name_result.scalars().all())
    names.sort(key=lambda name: not name.lower().startswith(query.lower()))

    category_result = await db.execute(
        select(Product.category)
        .where(Product.category != "", Product.category.ilike(contains))
        .distinct()
        .order_by(Product.category)
        .limit(5)
    )

    suggestions = [Suggestion(type="product", text=name) for name in names[:limit]]
    suggestions += [
        Suggestion(type="category", text=category) for category in category_result.scalars().all()
    ]
    return SuggestionsResponse(suggestions=suggestions[:limit])


async def _facet_counts(db: AsyncSession, column: Any) -> list[FacetCount]:
    result = await db.execute(
        select(column, func.count(Product.id))
        .where(column != "", Product.active == True)  # noqa: E712
        .group_by(column)
        .order_by(column)
    )
    return [FacetCount(name=name, product_count=count) for name, count in result.all()]


@router.get("/categories", response_model=dict[str, list[FacetCount]])
async def list_categories(db: AsyncSession = Depends(get_db)) -> dict[str, list[FacetCount]]:
    """List categories with product counts."""
    return {"categories": await _facet_counts(db, Product.category)}


@router.get("/domains", response_model=dict[str, list[FacetCount]])
async def list_domains(db: AsyncSession = Depends(get_db)) -> dict[str, list[FacetCount]]:
    """List domains with product counts."""
    return {"domains": await _facet_counts(db, Product.domain)}
