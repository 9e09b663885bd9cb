"""Optional layers around search: result memoization and analytics sinks.

Neither is required for correct results. The scorer never calls them.
"""

from collections import Counter, OrderedDict
from collections.abc import Hashable
from typing import Optional, Protocol

from catalog_search.search.models import Product


class SearchCache:
    """Bounded LRU memo of search results keyed by normalized query + filters."""

    def __init__(self, max_entries: int = 256) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[Hashable, list[Product]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Hashable) -> Optional[list[Product]]:
        """Return cached results, or None on a miss."""
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return list(self._entries[key])

    def set(self, key: Hashable, results: list[Product]) -> None:
        """Store results, evicting the least recently used entry when full."""
        if self.max_entries <= 0:
            return
        self._entries[key] = list(results)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        """Drop every entry (call after any catalog change)."""
        self._entries.clear()


class SearchAnalytics(Protocol):
    """Sink for search analytics events."""

    async def record(
        self,
        query: str,
        category: Optional[str],
        domain: Optional[str],
        result_count: int,
    ) -> None: ...


class InMemorySearchAnalytics:
    """Process-local analytics: total searches and popular queries."""

    def __init__(self) -> None:
        self.total_searches = 0
        self.popular_queries: Counter[str] = Counter()

    async def record(
        self,
        query: str,
        category: Optional[str],
        domain: Optional[str],
        result_count: int,
    ) -> None:
        self.total_searches += 1
        self.popular_queries[query.strip().lower()] += 1

    def top_queries(self, limit: int = 10) -> list[tuple[str, int]]:
        """Most searched queries, most frequent first."""
        return self.popular_queries.most_common(limit)
