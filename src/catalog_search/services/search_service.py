"""Search Service - wraps the relevance scorer for the HTTP search surface.

Narrows the catalog with SQL filters, ranks it with the scorer, re-sorts
when another sort mode is requested, paginates, and reports the query to
an analytics sink.

Usage:
    params = SearchParams(q="smart rack", category="server-racks", page=1)
    page = await run_search(session, params, cache=get_search_cache())
    print(f"{page.total} matches over {page.pages} pages")
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_search.config import get_settings
from catalog_search.db.models import Product as ProductRow
from catalog_search.search.cache import SearchAnalytics, SearchCache
from catalog_search.search.models import Product, ScoredResult
from catalog_search.search.scorer import normalize_query, search
from catalog_search.services.catalog import fetch_product_rows, to_search_products

logger = logging.getLogger(__name__)


class SortBy(str, Enum):
    """Result ordering modes."""

    RELEVANCE = "relevance"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NAME = "name"
    NEWEST = "newest"


class SearchParams(BaseModel):
    """A search request."""

    q: str = Field("", description="Free-text query (empty = browse all)")
    category: Optional[str] = Field(None, description="Exact category filter")
    domain: Optional[str] = Field(None, description="Exact domain filter")
    min_price: Optional[float] = Field(None, ge=0, description="Minimum price (inclusive)")
    max_price: Optional[float] = Field(None, ge=0, description="Maximum price (inclusive)")
    sort_by: SortBy = Field(SortBy.RELEVANCE, description="Result ordering")
    page: int = Field(1, ge=1, description="1-based page number")
    limit: int = Field(20, ge=1, le=100, description="Results per page")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class SearchHit:
    """A matching product row, with its score when ranked by relevance."""

    row: ProductRow
    relevance_score: Optional[int] = None
    matched_fields: Optional[list[str]] = None


@dataclass
class SearchPage:
    """One page of search results plus pagination metadata."""

    hits: list[SearchHit] = field(default_factory=list)
    page: int = 1
    limit: int = 20
    total: int = 0

    @property
    def pages(self) -> int:
        """Number of pages needed for all results."""
        return math.ceil(self.total / self.limit) if self.limit else 0


@lru_cache
def get_search_cache() -> SearchCache:
    """Process-wide search result cache."""
    return SearchCache(max_entries=get_settings().search_cache_size)


def _cache_key(normalized_query: str, params: SearchParams) -> tuple:
    return (
        normalized_query,
        params.category or "",
        params.domain or "",
        params.min_price,
        params.max_price,
    )


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _created_at_key(hit: SearchHit) -> datetime:
    created_at = hit.row.created_at
    if created_at is None:
        return _EPOCH
    # SQLite hands back naive datetimes
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at


def sort_hits(hits: list[SearchHit], sort_by: SortBy) -> list[SearchHit]:
    """Order hits by a non-relevance sort mode. Missing prices go last."""
    if sort_by == SortBy.PRICE_ASC:
        return sorted(hits, key=lambda h: (h.row.price is None, h.row.price or 0))
    if sort_by == SortBy.PRICE_DESC:
        return sorted(hits, key=lambda h: (h.row.price is None, -(h.row.price or 0)))
    if sort_by == SortBy.NAME:
        return sorted(hits, key=lambda h: h.row.name.lower())
    if sort_by == SortBy.NEWEST:
        return sorted(hits, key=_created_at_key, reverse=True)
    return list(hits)


def rank_products(
    products: list[Product],
    normalized_query: str,
    params: SearchParams,
    cache: Optional[SearchCache] = None,
) -> list[Product]:
    """Run the scorer, memoizing by query and filters when a cache is given."""
    if cache is None or not normalized_query:
        return search(products, normalized_query)

    key = _cache_key(normalized_query, params)
    cached = cache.get(key)
    if cached is not None:
        return cached

    results = search(products, normalized_query)
    cache.set(key, results)
    return results


async def run_search(
    session: AsyncSession,
    params: SearchParams,
    cache: Optional[SearchCache] = None,
    analytics: Optional[SearchAnalytics] = None,
) -> SearchPage:
    """Execute a search request.

    Args:
        session: Database session
        params: Query, filters, sort mode and pagination
        cache: Optional result cache
        analytics: Optional analytics sink, told about every non-empty query

    Returns:
        SearchPage with the requested page of hits
    """
    rows = await fetch_product_rows(
        session,
        category=params.category,
        domain=params.domain,
        min_price=params.min_price,
        max_price=params.max_price,
    )
    rows_by_slug = {row.slug: row for row in rows}

    normalized_query = normalize_query(params.q)
    ranked = rank_products(to_search_products(rows), normalized_query, params, cache)

    hits = []
    for product in ranked:
        row = rows_by_slug.get(product.id)
        if row is None:
            continue
        if isinstance(product, ScoredResult):
            hits.append(SearchHit(row, product.relevance_score, product.matched_fields))
        else:
            hits.append(SearchHit(row))

    if params.sort_by != SortBy.RELEVANCE:
        # Scores don't drive this ordering, so they aren't reported either
        hits = [SearchHit(hit.row) for hit in sort_hits(hits, params.sort_by)]

    if normalized_query and analytics is not None:
        await analytics.record(params.q, params.category, params.domain, len(hits))

    return SearchPage(
        hits=hits[params.offset : params.offset + params.limit],
        page=params.page,
        limit=params.limit,
        total=len(hits),
    )
