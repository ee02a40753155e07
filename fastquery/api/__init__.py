"""
FastAPI integration for search endpoints.
"""

from fastquery.api.dependencies import (
    SearchBundle,
    ValidatedParams,
    get_filter_params,
    get_query_params,
    get_search_params,
)

__all__ = [
    "SearchBundle",
    "ValidatedParams",
    "get_filter_params",
    "get_query_params",
    "get_search_params",
]
