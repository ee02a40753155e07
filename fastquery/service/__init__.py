"""
Search services.
"""

from fastquery.service.factory import SearchServiceFactory
from fastquery.service.search import SearchService

__all__ = ["SearchService", "SearchServiceFactory"]
