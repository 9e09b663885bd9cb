"""Relevance search module."""

from catalog_search.search.cache import InMemorySearchAnalytics, SearchAnalytics, SearchCache
from catalog_search.search.fuzzy import fuzzy_match, levenshtein_distance
from catalog_search.search.models import Product, RelevanceWeights, ScoredResult
from catalog_search.search.scorer import (
    calculate_relevance,
    get_matched_fields,
    normalize_query,
    score_product,
    search,
)

__all__ = [
    # Models
    "Product",
    "RelevanceWeights",
    "ScoredResult",
    # Fuzzy matching
    "fuzzy_match",
    "levenshtein_distance",
    # Scorer
    "calculate_relevance",
    "get_matched_fields",
    "normalize_query",
    "score_product",
    "search",
    # Optional layers
    "InMemorySearchAnalytics",
    "SearchAnalytics",
    "SearchCache",
]
