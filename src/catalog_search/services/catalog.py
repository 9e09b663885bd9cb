"""Catalog Provider - loads products from the database for searching.

Rows are validated once here, at the catalog boundary, and converted to the
scorer's Product model. Invalid rows are logged and skipped so they never
reach the scoring loop.

Usage:
    products = await get_products_filtered(session, category="server-racks")
    results = search(products, "smart rack")
"""

import logging
import re
import unicodedata
from typing import Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_search.db.models import Product as ProductRow
from catalog_search.search.models import Product


logger = logging.getLogger(__name__)


class InvalidProductError(ValueError):
    """Stored product can't be searched (missing name or description)."""

    def __init__(self, slug: str, reason: str):
        self.slug = slug
        self.reason = reason
        super().__init__(f"Invalid product {slug!r}: {reason}")


def slugify(text: str) -> str:
    """Build a URL slug from free text ("SR-42U Smart Rack" -> "sr-42u-smart-rack")."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "product"


def to_search_product(row: ProductRow) -> Product:
    """Convert a database row into a scorer Product.

    Raises:
        InvalidProductError: If the row has no name or description.
    """
    if not (row.name or "").strip():
        raise InvalidProductError(row.slug, "name is empty")
    if not (row.description or "").strip():
        raise InvalidProductError(row.slug, "description is empty")

    try:
        return Product(
            id=row.slug,
            name=row.name,
            description=row.description,
            category=row.category,
            domain=row.domain,
            tags=[tag for tag in (row.tags or []) if tag],
            specifications=row.specifications or {},
            features=[feature for feature in (row.features or []) if feature],
            rating=row.rating,
            availability=row.availability,
            price=float(row.price) if row.price is not None else None,
            created_at=row.created_at,
        )
    except ValidationError as e:
        raise InvalidProductError(row.slug, str(e)) from e


def to_search_products(rows: list[ProductRow]) -> list[Product]:
    """Convert rows, skipping (and logging) the invalid ones."""
    products = []
    for row in rows:
        try:
            products.append(to_search_product(row))
        except InvalidProductError as e:
            logger.warning(f"Skipping product in search catalog: {e}")
    return products


async def fetch_product_rows(
    session: AsyncSession,
    category: Optional[str] = None,
    domain: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> list[ProductRow]:
    """Active product rows matching the filters, ordered by name then slug."""
    query = select(ProductRow).where(ProductRow.active == True)  # noqa: E712

    if category:
        query = query.where(ProductRow.category == category)
    if domain:
        query = query.where(ProductRow.domain == domain)
    if min_price is not None:
        query = query.where(ProductRow.price >= min_price)
    if max_price is not None:
        query = query.where(ProductRow.price <= max_price)

    query = query.order_by(ProductRow.name, ProductRow.slug)
    result = await session.execute(query)
    return list(result.scalars().all())


async def get_all_products(session: AsyncSession) -> list[Product]:
    """Every searchable product in the catalog."""
    return to_search_products(await fetch_product_rows(session))


async def get_products_filtered(
    session: AsyncSession,
    category: Optional[str] = None,
    domain: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> list[Product]:
    """Searchable products narrowed by category, domain and price range."""
    rows = await fetch_product_rows(session, category, domain, min_price, max_price)
    return to_search_products(rows)
