"""Tests for the relevance search module.

These tests validate scores against hand-calculated examples from the
weight table in catalog_search.search.scorer.
"""

import pytest
from pydantic import ValidationError

from catalog_search.search import (
    InMemorySearchAnalytics,
    Product,
    RelevanceWeights,
    ScoredResult,
    SearchCache,
    calculate_relevance,
    get_matched_fields,
    normalize_query,
    score_product,
    search,
)


# --- Test Fixtures ---


@pytest.fixture
def smart_rack() -> Product:
    """Matches "smart rack" in its name, a tag and via fuzzy matching."""
    return Product(
        id="sr-42u-smart",
        name="SR-42U Smart Rack",
        description="Intelligent 42U cabinet with thermal management",
        tags=["smart", "42u"],
        rating=4.8,
        availability="In Stock",
    )


@pytest.fixture
def network_cabinet() -> Product:
    """Shares no words (or near-words) with "smart rack"."""
    return Product(
        id="nc-27u-network",
        name="Network Cabinet",
        description="Wall mounted enclosure for network switches",
        tags=["network"],
        rating=4.5,
        availability="In Stock",
    )


@pytest.fixture
def plain_product() -> Product:
    """Only the required fields."""
    return Product(id="plain-1", name="Plain Widget", description="Nothing special")


# --- Query normalization ---


class TestNormalizeQuery:
    """Tests for query normalization."""

    def test_trims_and_lowercases(self):
        assert normalize_query("  Smart RACK ") == "smart rack"

    def test_none_is_empty(self):
        assert normalize_query(None) == ""

    def test_whitespace_only_is_empty(self):
        assert normalize_query(" \t\n ") == ""


# --- Scoring ---


class TestCalculateRelevance:
    """Tests for per-product scoring."""

    def test_smart_rack_score_breakdown(self, smart_rack):
        """
        Whole query in name:                          100
        "smart": name 50 + tag 30 + fuzzy tag 15
                 + fuzzy name 10                      105
        "rack":  name 50 + fuzzy name 10               60
        Rating 4.8 >= 4.5:                             10
        In Stock:                                       5
        Total:                                        280
        """
        score, matched = calculate_relevance(smart_rack, "smart rack")

        assert score == 280
        assert matched == ["name", "tags"]

    def test_no_match_scores_zero(self, network_cabinet):
        """Popularity boosts alone never make a product match."""
        score, matched = calculate_relevance(network_cabinet, "smart rack")

        assert score == 0
        assert matched == []

    def test_query_in_id(self):
        """Whole query inside the id only scores the id weight plus boosts."""
        product = Product(id="xq-9000", name="Thing", description="Stuff")

        score, matched = calculate_relevance(product, "xq-9000")

        assert score == 90
        assert matched == []

    def test_query_in_description(self, plain_product):
        """
        Whole query in description:   80
        "nothing" in description:     25
        fuzzy description:             5
        Total:                       110
        """
        score, matched = calculate_relevance(plain_product, "nothing")

        assert score == 110
        assert matched == ["description"]

    def test_category_and_domain(self):
        """
        "racks" in category:  40
        "racks" in domain:    35
        Total:                75
        """
        product = Product(
            id="p-1",
            name="Cabinet",
            description="Enclosure",
            category="server-racks",
            domain="racks-and-enclosures",
        )

        score, matched = calculate_relevance(product, "racks")

        assert score == 75
        assert matched == ["category"]

    def test_specifications_each_entry_counts(self):
        """
        Key "height" contains "height":                20
        Value "steel" in two entries:             15 x 2 = 30
        """
        product = Product(
            id="p-1",
            name="Cabinet",
            description="Enclosure",
            specifications={"height": "42U", "material": "steel", "frame": "steel"},
        )

        assert calculate_relevance(product, "height")[0] == 20
        assert calculate_relevance(product, "steel")[0] == 30

    def test_specification_values_are_stringified(self):
        """Non-string spec values are matched through their text form."""
        product = Product(
            id="p-1",
            name="Cabinet",
            description="Enclosure",
            specifications={"units": 42},
        )

        assert calculate_relevance(product, "42")[0] == 15

    def test_specification_value_text_form(self):
        """
        Integral floats drop the fraction; None and booleans use JSON spelling.
        Each matching value scores the spec value weight (15).
        """
        product = Product(
            id="p-1",
            name="Cabinet",
            description="Enclosure",
            specifications={"weight": 42.0, "rated": None, "sealed": True},
        )

        assert calculate_relevance(product, "42")[0] == 15
        assert calculate_relevance(product, "42.0")[0] == 0
        assert calculate_relevance(product, "null")[0] == 15
        assert calculate_relevance(product, "none")[0] == 0
        assert calculate_relevance(product, "true")[0] == 15

    def test_integer_id(self):
        """Numeric ids are accepted and matched as text."""
        product = Product(id=42, name="Smart Rack", description="A rack")

        score, _ = calculate_relevance(product, "42")

        assert product.id == "42"
        assert score == 90

    def test_features_each_entry_counts(self):
        """
        "cable" in two features:  20 x 2 = 40
        """
        product = Product(
            id="p-1",
            name="Cabinet",
            description="Enclosure",
            features=["Cable management", "Cable trays", "Lockable doors"],
        )

        score, matched = calculate_relevance(product, "cable")

        assert score == 40
        assert matched == []

    def test_tag_counted_per_tag(self):
        """
        "net" inside both tags:  30 x 2 = 60
        """
        product = Product(
            id="p-1",
            name="Switch Box",
            description="Small enclosure",
            tags=["network", "ethernet"],
        )

        assert calculate_relevance(product, "net")[0] == 60

    def test_fuzzy_only_match(self):
        """
        "rakc" is 2 edits from "rack" (allowance 1): no match.
        "rck" is 1 edit from "rack" (allowance 1): fuzzy name 10.
        """
        product = Product(id="p-1", name="Rack", description="Enclosure")

        assert calculate_relevance(product, "rakc")[0] == 0
        assert calculate_relevance(product, "rck")[0] == 10

    def test_boosts_added_once(self, smart_rack):
        """A one-word query still gets each boost exactly once."""
        no_boosts = smart_rack.model_copy(update={"rating": None, "availability": None})

        boosted = calculate_relevance(smart_rack, "rack")[0]
        plain = calculate_relevance(no_boosts, "rack")[0]

        assert boosted - plain == 15

    def test_made_to_order_gets_no_stock_boost(self, smart_rack):
        made_to_order = smart_rack.model_copy(update={"availability": "Made to Order"})

        in_stock = calculate_relevance(smart_rack, "rack")[0]
        not_in_stock = calculate_relevance(made_to_order, "rack")[0]

        assert in_stock - not_in_stock == 5

    def test_rating_threshold_is_inclusive(self, smart_rack):
        at_threshold = smart_rack.model_copy(update={"rating": 4.5, "availability": None})
        below = smart_rack.model_copy(update={"rating": 4.4, "availability": None})

        at_score = calculate_relevance(at_threshold, "rack")[0]
        below_score = calculate_relevance(below, "rack")[0]

        assert at_score - below_score == 10

    def test_optional_fields_missing(self, plain_product):
        """Products without tags, specs or features score on what they have."""
        score, _ = calculate_relevance(plain_product, "widget")

        # whole query in name 100 + name 50 + fuzzy name 10
        assert score == 160

    def test_custom_weights(self, smart_rack):
        """A rebalanced table changes the score accordingly."""
        weights = RelevanceWeights(version="2", query_in_name=0, high_rating_boost=0, in_stock_boost=0)

        score, _ = calculate_relevance(smart_rack, "smart rack", weights)

        assert score == 165


class TestMatchedFields:
    """Tests for matched field reporting."""

    def test_ignores_fuzzy_matches(self):
        product = Product(id="p-1", name="Rack", description="Enclosure")

        assert get_matched_fields(product, "rck") == []

    def test_sorted_and_unique(self):
        product = Product(
            id="p-1",
            name="Steel rack",
            description="Steel enclosure",
            category="steel-racks",
            tags=["steel"],
        )

        matched = get_matched_fields(product, "steel rack")

        assert matched == ["category", "description", "name", "tags"]

    def test_id_domain_specs_features_not_reported(self):
        product = Product(
            id="steel",
            name="Cabinet",
            description="Enclosure",
            domain="steel",
            specifications={"steel": "steel"},
            features=["steel"],
        )

        assert get_matched_fields(product, "steel") == []


class TestScoreProduct:
    """Tests for single-product scoring."""

    def test_returns_scored_result(self, smart_rack):
        result = score_product(smart_rack, "smart rack")

        assert isinstance(result, ScoredResult)
        assert result.id == smart_rack.id
        assert result.name == smart_rack.name
        assert result.relevance_score == 280

    def test_returns_none_for_no_match(self, network_cabinet):
        assert score_product(network_cabinet, "smart rack") is None

    def test_rescoring_a_result(self, smart_rack):
        """A ScoredResult can be scored again for another query."""
        first = score_product(smart_rack, "smart rack")

        second = score_product(first, "rack")

        assert second is not None
        assert second.relevance_score == 175


# --- Search ---


class TestSearch:
    """Tests for the search entry point."""

    def test_smart_rack_scenario(self, smart_rack, network_cabinet):
        """Only the matching product comes back, with its full score."""
        results = search([network_cabinet, smart_rack], "smart rack")

        assert len(results) == 1
        assert results[0].id == "sr-42u-smart"
        assert results[0].relevance_score == 280
        assert results[0].matched_fields == ["name", "tags"]

    def test_empty_query_returns_catalog(self, smart_rack, network_cabinet, plain_product):
        """Browse mode: same products, same order, no scores."""
        catalog = [network_cabinet, plain_product, smart_rack]

        for query in ("", "   ", None):
            results = search(catalog, query)
            assert results == catalog
            assert not any(isinstance(r, ScoredResult) for r in results)

    def test_query_is_case_insensitive(self, smart_rack):
        lower = search([smart_rack], "smart rack")
        upper = search([smart_rack], "  SMART Rack  ")

        assert [r.relevance_score for r in lower] == [r.relevance_score for r in upper]

    def test_results_sorted_by_score(self, smart_rack, plain_product):
        """
        "rack" against smart_rack:
            query in name 100 + name 50 + fuzzy 10 + boosts 15 = 175
        "rack" against a tagged rack without boosts:
            query in name 100 + name 50 + tag 30 + fuzzy tag 15 + fuzzy 10 = 205
        """
        tagged = Product(id="t-1", name="Wall Rack", description="Small", tags=["rack"])

        results = search([smart_rack, plain_product, tagged], "rack")

        assert [r.id for r in results] == ["t-1", "sr-42u-smart"]
        assert [r.relevance_score for r in results] == [205, 175]

    def test_ties_keep_catalog_order(self):
        first = Product(id="a-1", name="Blue Rack", description="One")
        second = Product(id="b-1", name="Red Rack", description="Two")

        assert [r.id for r in search([second, first], "rack")] == ["b-1", "a-1"]
        assert [r.id for r in search([first, second], "rack")] == ["a-1", "b-1"]

    def test_every_result_has_positive_score(self, smart_rack, network_cabinet, plain_product):
        results = search([smart_rack, network_cabinet, plain_product], "cabinet")

        assert results
        assert all(r.relevance_score > 0 for r in results)

    def test_no_matches(self, smart_rack, network_cabinet):
        assert search([smart_rack, network_cabinet], "zzzzzz") == []

    def test_empty_catalog(self):
        assert search([], "rack") == []

    def test_does_not_modify_catalog(self, smart_rack, network_cabinet):
        catalog = [network_cabinet, smart_rack]
        snapshot = [p.model_copy() for p in catalog]

        search(catalog, "smart rack")

        assert catalog == snapshot

    def test_deterministic(self, smart_rack, network_cabinet, plain_product):
        catalog = [smart_rack, network_cabinet, plain_product]

        assert search(catalog, "cabinet rack") == search(catalog, "cabinet rack")


# --- Models ---


class TestProductModel:
    """Tests for catalog boundary validation."""

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Product(id="p-1", name="", description="Something")

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError):
            Product(id="p-1", name="Something", description="")

    def test_integer_id_becomes_string(self):
        product = Product(id=7, name="Thing", description="Stuff")

        assert product.id == "7"
        assert search([product], "thing")[0].id == "7"

    def test_boolean_id_rejected(self):
        with pytest.raises(ValidationError):
            Product(id=True, name="Thing", description="Stuff")

    def test_none_collections_become_empty(self):
        product = Product(
            id="p-1",
            name="Thing",
            description="Stuff",
            category=None,
            domain=None,
            tags=None,
            features=None,
            specifications=None,
        )

        assert product.category == ""
        assert product.domain == ""
        assert product.tags == []
        assert product.features == []
        assert product.specifications == {}

    def test_rating_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            Product(id="p-1", name="Thing", description="Stuff", rating=5.5)

    def test_scored_result_requires_positive_score(self):
        with pytest.raises(ValidationError):
            ScoredResult(id="p-1", name="Thing", description="Stuff", relevance_score=0)


# --- Optional layers ---


class TestSearchCache:
    """Tests for the LRU result cache."""

    def test_miss_then_hit(self, smart_rack):
        cache = SearchCache(max_entries=2)

        assert cache.get("rack") is None
        cache.set("rack", [smart_rack])
        assert cache.get("rack") == [smart_rack]

    def test_evicts_least_recently_used(self, smart_rack):
        cache = SearchCache(max_entries=2)
        cache.set("a", [smart_rack])
        cache.set("b", [])
        cache.get("a")
        cache.set("c", [])

        assert cache.get("b") is None
        assert cache.get("a") == [smart_rack]
        assert len(cache) == 2

    def test_clear(self, smart_rack):
        cache = SearchCache()
        cache.set("a", [smart_rack])

        cache.clear()

        assert len(cache) == 0
        assert cache.get("a") is None

    def test_disabled_when_size_zero(self, smart_rack):
        cache = SearchCache(max_entries=0)
        cache.set("a", [smart_rack])

        assert cache.get("a") is None

    def test_returns_copies(self, smart_rack):
        cache = SearchCache()
        cache.set("a", [smart_rack])

        cache.get("a").clear()

        assert cache.get("a") == [smart_rack]


class TestInMemorySearchAnalytics:
    """Tests for the process-local analytics sink."""

    @pytest.mark.asyncio
    async def test_counts_searches_and_queries(self):
        analytics = InMemorySearchAnalytics()

        await analytics.record("Smart Rack", None, None, 1)
        await analytics.record(" smart rack ", "server-racks", None, 1)
        await analytics.record("cabinet", None, None, 3)

        assert analytics.total_searches == 3
        assert analytics.top_queries(1) == [("smart rack", 2)]
