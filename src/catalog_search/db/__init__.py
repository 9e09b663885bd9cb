"""Database module."""

from catalog_search.db.base import get_db
from catalog_search.db.models import AdminSession, AdminUser, Product, SearchAnalytics

__all__ = ["get_db", "AdminSession", "AdminUser", "Product", "SearchAnalytics"]
