"""
Search criteria model: pagination, filtering, free-text search and the
per-entity allow-lists they are validated against.
"""

from fastquery.query.criteria import (
    ALL_FIELDS,
    Combinator,
    SearchCriteria,
    SearchOperator,
    SearchRequest,
)
from fastquery.query.filtering import FilterCondition, FilterOperator, FilterParams
from fastquery.query.pagination import PageRequest, QueryParams, SortDirection, SortOrder
from fastquery.query.searching import SearchParams
from fastquery.query.supported import SupportedParams, SupportedParamsRegistry
from fastquery.query.validator import QueryParamValidator

__all__ = [
    "ALL_FIELDS",
    "Combinator",
    "FilterCondition",
    "FilterOperator",
    "FilterParams",
    "PageRequest",
    "QueryParams",
    "QueryParamValidator",
    "SearchCriteria",
    "SearchOperator",
    "SearchParams",
    "SearchRequest",
    "SortDirection",
    "SortOrder",
    "SupportedParams",
    "SupportedParamsRegistry",
]
