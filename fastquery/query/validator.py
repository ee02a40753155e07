"""
Validation of query, filter and search parameters against an entity's
declared allow-list.

Each parameter kind has its own policy:
- Sort: an unknown sort field is replaced by the entity's first sortable
  field (or the fallback field when it declares none)
- Page size: clamped to the entity's maximum
- Filter: an unknown filter field is rejected with InvalidArgumentError
- Search: unknown search fields are dropped; when none are left the
  query is cleared

Entities without a registered allow-list pass through unchanged.
"""

from typing import Any, Hashable, Optional, Tuple

from fastquery.errors.exceptions import InvalidArgumentError
from fastquery.logging import Logger, ensure_logger
from fastquery.query.filtering import FilterParams
from fastquery.query.pagination import DEFAULT_SORT_FIELD, QueryParams
from fastquery.query.searching import SearchParams
from fastquery.query.supported import SupportedParamsRegistry


class QueryParamValidator:
    """
    Sanitizes request parameters for a given entity type.

    Parameters are corrected in place and also returned.
    """

    def __init__(
        self,
        registry: SupportedParamsRegistry,
        fallback_sort_field: Optional[str] = None,
        settings: Optional[Any] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Args:
            registry: Allow-list registry to validate against
            fallback_sort_field: Sort field used when an entity declares no
                sortable fields; defaults to ``settings.DEFAULT_SORT_FIELD``
                or ``created_at``
            settings: Optional application settings
            logger: Optional logger
        """
        self.registry = registry
        self.fallback_sort_field = (
            fallback_sort_field
            or getattr(settings, "DEFAULT_SORT_FIELD", None)
            or DEFAULT_SORT_FIELD
        )
        self.logger = ensure_logger(logger, __name__, settings)

    def validate_query_params(
        self, query_params: QueryParams, entity_type: Hashable
    ) -> QueryParams:
        supported = self.registry.get(entity_type)
        if supported is None:
            return query_params

        if query_params.sort_by and not supported.allows_sort(query_params.sort_by):
            replacement = (
                supported.allowed_sort_fields[0]
                if supported.allowed_sort_fields
                else self.fallback_sort_field
            )
            self.logger.debug(
                f"Sort field '{query_params.sort_by}' not allowed for {entity_type}, "
                f"using '{replacement}'"
            )
            query_params.sort_by = replacement

        if query_params.size > supported.max_page_size:
            self.logger.debug(
                f"Page size {query_params.size} exceeds maximum "
                f"{supported.max_page_size} for {entity_type}"
            )
            query_params.size = supported.max_page_size

        return query_params

    def validate_filter_params(
        self, filter_params: FilterParams, entity_type: Hashable
    ) -> FilterParams:
        """
        Raises:
            InvalidArgumentError: If any filter field is not allow-listed
        """
        supported = self.registry.get(entity_type)
        if supported is None:
            return filter_params

        for field in filter_params.fields():
            if not supported.allows_filter(field):
                raise InvalidArgumentError(
                    f"Filter field '{field}' is not allowed. Allowed fields: "
                    f"{', '.join(supported.allowed_filter_fields)}",
                    field=field,
                )

        return filter_params

    def validate_search_params(
        self, search_params: SearchParams, entity_type: Hashable
    ) -> SearchParams:
        supported = self.registry.get(entity_type)
        if supported is None:
            return search_params

        allowed = [field for field in search_params.fields if supported.allows_search(field)]
        dropped = [field for field in search_params.fields if field not in allowed]
        if dropped:
            self.logger.debug(f"Dropping search fields {dropped} for {entity_type}")
        search_params.fields = allowed

        if not allowed:
            search_params.query = None

        return search_params

    def validate_all(
        self,
        query_params: QueryParams,
        filter_params: FilterParams,
        search_params: SearchParams,
        entity_type: Hashable,
    ) -> Tuple[QueryParams, FilterParams, SearchParams]:
        return (
            self.validate_query_params(query_params, entity_type),
            self.validate_filter_params(filter_params, entity_type),
            self.validate_search_params(search_params, entity_type),
        )
