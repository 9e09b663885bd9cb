"""Relevance scoring for catalog search.

Weight table (RelevanceWeights version 1):
| Match                                   | Points        |
|-----------------------------------------|---------------|
| Whole query in name                     | 100           |
| Whole query in id                       | 90            |
| Whole query in description              | 80            |
| Word in name                            | 50            |
| Word in tag                             | 30 per tag    |
| Word fuzzy-matches tag                  | 15 per tag    |
| Word in category                        | 40            |
| Word in domain                          | 35            |
| Word in description                     | 25            |
| Word in specification key / value       | 20 / 15 each  |
| Word in feature                         | 20 per feature|
| Word fuzzy-matches name / description   | 10 / 5        |
| Rating >= 4.5                           | 10            |
| Availability "In Stock"                 | 5             |

Popularity boosts only apply to products that matched the query somewhere,
so a score of 0 always means "no match".
"""

from typing import Any

from catalog_search.search.fuzzy import fuzzy_match
from catalog_search.search.models import IN_STOCK, Product, RelevanceWeights, ScoredResult

DEFAULT_WEIGHTS = RelevanceWeights()


def spec_value_text(value: Any) -> str:
    """Lower-cased text form of a specification value.

    Integral floats drop the fraction ("42.0" -> "42"), booleans and None use
    their JSON spelling.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).lower()


def normalize_query(raw_query: str | None) -> str:
    """Lower-case and trim a raw query string."""
    return (raw_query or "").strip().lower()


def tokenize(normalized_query: str) -> list[str]:
    """Split a normalized query into non-empty words."""
    return normalized_query.split()


def get_matched_fields(product: Product, normalized_query: str) -> list[str]:
    """Fields containing at least one query word verbatim.

    Fuzzy matches are ignored here; the result is display metadata only.
    """
    name = product.name.lower()
    description = product.description.lower()
    category = product.category.lower()
    tags = [tag.lower() for tag in product.tags]

    matched: set[str] = set()
    for word in tokenize(normalized_query):
        if word in name:
            matched.add("name")
        if word in description:
            matched.add("description")
        if any(word in tag for tag in tags):
            matched.add("tags")
        if word in category:
            matched.add("category")

    return sorted(matched)


def calculate_relevance(
    product: Product,
    normalized_query: str,
    weights: RelevanceWeights | None = None,
) -> tuple[int, list[str]]:
    """Calculate the relevance of a product for a query.

    Args:
        product: Product to score
        normalized_query: Lower-cased, trimmed, non-empty query
        weights: Weight table (uses the canonical table if None)

    Returns:
        Tuple of (score, matched_fields)
    """
    if weights is None:
        weights = DEFAULT_WEIGHTS

    name = product.name.lower()
    product_id = product.id.lower()
    description = product.description.lower()
    category = product.category.lower()
    domain = product.domain.lower()
    tags = [tag.lower() for tag in product.tags]
    features = [feature.lower() for feature in product.features]
    specifications = [
        (str(key).lower(), spec_value_text(value))
        for key, value in product.specifications.items()
    ]

    score = 0

    # --- Whole query ---
    if normalized_query in name:
        score += weights.query_in_name
    if normalized_query in product_id:
        score += weights.query_in_id
    if normalized_query in description:
        score += weights.query_in_description

    # --- Word by word ---
    for word in tokenize(normalized_query):
        if word in name:
            score += weights.word_in_name

        for tag in tags:
            if word in tag:
                score += weights.word_in_tag
            if fuzzy_match(tag, word):
                score += weights.word_fuzzy_tag

        if word in category:
            score += weights.word_in_category
        if word in domain:
            score += weights.word_in_domain
        if word in description:
            score += weights.word_in_description

        for key, value in specifications:
            if word in key:
                score += weights.word_in_spec_key
            if word in value:
                score += weights.word_in_spec_value

        for feature in features:
            if word in feature:
                score += weights.word_in_feature

        # Typo tolerance
        if fuzzy_match(name, word):
            score += weights.word_fuzzy_name
        if fuzzy_match(description, word):
            score += weights.word_fuzzy_description

    # --- Popularity boosts ---
    if score > 0:
        if product.rating is not None and product.rating >= weights.high_rating_threshold:
            score += weights.high_rating_boost
        if product.availability == IN_STOCK:
            score += weights.in_stock_boost

    return score, get_matched_fields(product, normalized_query)


def score_product(
    product: Product,
    normalized_query: str,
    weights: RelevanceWeights | None = None,
) -> ScoredResult | None:
    """Score one product, returning None when it doesn't match at all."""
    score, matched_fields = calculate_relevance(product, normalized_query, weights)
    if score <= 0:
        return None

    return ScoredResult(
        **product.model_dump(exclude={"relevance_score", "matched_fields"}),
        relevance_score=score,
        matched_fields=matched_fields,
    )


def search(
    catalog: list[Product],
    raw_query: str | None,
    weights: RelevanceWeights | None = None,
) -> list[Product]:
    """Rank a catalog against a free-text query.

    This is the main entry point for relevance search. An empty or
    whitespace-only query is "browse all" mode and returns the catalog
    unchanged, in catalog order. Otherwise non-matching products are dropped
    and the rest are ordered by score, highest first; equal scores keep
    catalog order.

    Args:
        catalog: Products to search
        raw_query: Query as typed by the user
        weights: Weight table (uses the canonical table if None)

    Returns:
        The catalog itself in browse mode, else ScoredResult items
    """
    normalized_query = normalize_query(raw_query)
    if not normalized_query:
        return list(catalog)

    results: list[ScoredResult] = []
    for product in catalog:
        result = score_product(product, normalized_query, weights)
        if result is not None:
            results.append(result)

    # list.sort is stable
    results.sort(key=lambda result: result.relevance_score, reverse=True)
    return results
