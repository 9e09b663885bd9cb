"""Business logic services."""

from catalog_search.services.analytics import DatabaseSearchAnalytics, build_analytics_report
from catalog_search.services.catalog import (
    InvalidProductError,
    get_all_products,
    get_products_filtered,
    to_search_product,
)
from catalog_search.services.search_service import (
    SearchPage,
    SearchParams,
    SortBy,
    get_search_cache,
    run_search,
)

__all__ = [
    # Analytics
    "DatabaseSearchAnalytics",
    "build_analytics_report",
    # Catalog
    "InvalidProductError",
    "get_all_products",
    "get_products_filtered",
    "to_search_product",
    # Search
    "SearchPage",
    "SearchParams",
    "SortBy",
    "get_search_cache",
    "run_search",
]
