"""Search analytics - persistence of search events and the admin report."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy import case, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_search.db.models import Product, SearchAnalytics

logger = logging.getLogger(__name__)


class DatabaseSearchAnalytics:
    """Analytics sink writing one search_analytics row per search.

    Best effort: a failed write is logged and never fails the search.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record(
        self,
        query: str,
        category: Optional[str],
        domain: Optional[str],
        result_count: int,
    ) -> None:
        entry = SearchAnalytics(
            query=query.strip(),
            category=category or None,
            domain=domain or None,
            result_count=result_count,
            search_date=datetime.now(timezone.utc),
        )
        # Savepoint keeps a failed insert from poisoning the request transaction
        try:
            async with self.session.begin_nested():
                self.session.add(entry)
        except SQLAlchemyError as e:
            logger.warning(f"Failed to log search analytics for '{query}': {e}")


async def build_analytics_report(session: AsyncSession, days: int = 30) -> dict[str, Any]:
    """Summarize search activity and catalog growth.

    Args:
        session: Database session
        days: Look-back window for search statistics

    Returns:
        Dict with top searches, daily trends, category stats and product stats
    """
    now = datetime.now(timezone.utc)
    since = now - timedelta(days=days)
    week_ago = now - timedelta(days=7)

    # Top searches
    count_col = func.count(SearchAnalytics.id).label("count")
    top_result = await session.execute(
        select(
            SearchAnalytics.query,
            count_col,
            func.avg(SearchAnalytics.result_count).label("avg_results"),
        )
        .where(SearchAnalytics.search_date >= since, SearchAnalytics.query != "")
        .group_by(SearchAnalytics.query)
        .order_by(desc(count_col), SearchAnalytics.query)
        .limit(20)
    )
    top_searches = [
        {"query": query, "count": count, "avg_results": round(float(avg or 0), 2)}
        for query, count, avg in top_result.all()
    ]

    # Search trends
    day_col = func.date(SearchAnalytics.search_date).label("date")
    trend_result = await session.execute(
        select(day_col, func.count(SearchAnalytics.id).label("searches"))
        .where(SearchAnalytics.search_date >= since)
        .group_by(day_col)
        .order_by(desc(day_col))
    )
    search_trends = [
        {"date": str(day), "searches": searches} for day, searches in trend_result.all()
    ]

    # Category popularity
    searches_col = func.count(SearchAnalytics.id).label("searches")
    category_result = await session.execute(
        select(SearchAnalytics.category, searches_col)
        .where(SearchAnalytics.search_date >= since, SearchAnalytics.category.is_not(None))
        .group_by(SearchAnalytics.category)
        .order_by(desc(searches_col), SearchAnalytics.category)
        .limit(10)
    )
    category_stats = [
        {"category": category, "searches": searches}
        for category, searches in category_result.all()
    ]

    # Product counts
    product_result = await session.execute(
        select(
            func.count(Product.id),
            func.count(case((Product.created_at >= week_ago, 1))),
            func.count(case((Product.updated_at >= week_ago, 1))),
        )
    )
    total_products, new_this_week, updated_this_week = product_result.one()

    return {
        "period_days": days,
        "top_searches": top_searches,
        "search_trends": search_trends,
        "category_stats": category_stats,
        "product_stats": {
            "total_products": total_products,
            "new_this_week": new_this_week,
            "updated_this_week": updated_this_week,
        },
    }
