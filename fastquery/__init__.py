"""
FastQuery - validated, paginated search for FastAPI and SQLAlchemy.

Callers pass raw pagination, filter and search parameters; FastQuery
validates them against a per-entity allow-list, compiles them into a
storage-independent specification and runs it through a repository,
returning a uniform paged response.

Usage:
    from fastquery.query import QueryParams, FilterParams, SearchParams
    from fastquery.repository import InMemoryRepository
    from fastquery.service import SearchService

    service = SearchService(InMemoryRepository(items), searchable_fields=("name",))
    page = service.search_params(QueryParams(), FilterParams(), SearchParams("lamp", ["name"]))
"""

__version__ = "0.1.0"

# Public API exports
from fastquery.config import BaseAppSettings, get_settings
from fastquery.errors import AppError, InvalidArgumentError, setup_errors
from fastquery.factory import configure_app
from fastquery.logging import get_logger
from fastquery.query import (
    FilterOperator,
    FilterParams,
    QueryParams,
    QueryParamValidator,
    SearchCriteria,
    SearchParams,
    SearchRequest,
    SupportedParams,
    SupportedParamsRegistry,
)
from fastquery.schemas import PagedResponse, PageResponse
from fastquery.service import SearchService, SearchServiceFactory
from fastquery.specification import SpecificationBuilder

__all__ = [
    "AppError",
    "BaseAppSettings",
    "FilterOperator",
    "FilterParams",
    "InvalidArgumentError",
    "PageResponse",
    "PagedResponse",
    "QueryParams",
    "QueryParamValidator",
    "SearchCriteria",
    "SearchParams",
    "SearchRequest",
    "SearchService",
    "SearchServiceFactory",
    "SpecificationBuilder",
    "SupportedParams",
    "SupportedParamsRegistry",
    "configure_app",
    "get_logger",
    "get_settings",
    "setup_errors",
]
