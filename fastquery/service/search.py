"""
Search service: runs search requests against a repository.

The service compiles a request into a specification, asks the repository
for the requested page and wraps the result in a PageResponse, optionally
mapping every entity (e.g. to a pydantic schema).

Searchable fields (the fields a free-text query is matched against when
the request names none) are fixed per instance. Use
``with_searchable_fields`` for a differently configured copy, or pass
``searchable_fields`` per call.
"""

from typing import Any, Callable, Iterable, List, Optional, Tuple

from fastquery.logging import Logger, ensure_logger
from fastquery.query.criteria import SearchRequest
from fastquery.query.filtering import FilterParams
from fastquery.query.pagination import QueryParams
from fastquery.query.searching import SearchParams
from fastquery.repository.base import SearchRepository
from fastquery.schemas.page import PageResponse
from fastquery.specification.base import Specification
from fastquery.specification.builder import SpecificationBuilder

Mapper = Callable[[Any], Any]


class SearchService:
    """
    Read-only search over one repository.

    Example:
        ```python
        service = SearchService(repository, searchable_fields=("name", "description"))
        request = SearchRequest(pagination=PageRequest.of(0, 20, ["name"]))
        request.add_criterion("price>=10")
        page = service.search(request, mapper=ProductOut.model_validate)
        ```
    """

    def __init__(
        self,
        repository: SearchRepository,
        searchable_fields: Iterable[str] = (),
        logger: Optional[Logger] = None,
    ):
        self.repository = repository
        self._searchable_fields: Tuple[str, ...] = tuple(searchable_fields)
        self.logger = ensure_logger(logger, __name__)

    @property
    def searchable_fields(self) -> Tuple[str, ...]:
        return self._searchable_fields

    def with_searchable_fields(self, *fields: str) -> "SearchService":
        """Return a new service over the same repository with other searchable fields."""
        return type(self)(self.repository, fields, logger=self.logger)

    def build_specification(
        self, request: SearchRequest, searchable_fields: Optional[Iterable[str]] = None
    ) -> Specification:
        fields = self._searchable_fields if searchable_fields is None else tuple(searchable_fields)
        return SpecificationBuilder.from_request(request, fields).build()

    def search(
        self,
        request: SearchRequest,
        mapper: Optional[Mapper] = None,
        *,
        searchable_fields: Optional[Iterable[str]] = None,
    ) -> PageResponse:
        """
        Run a paged search.

        Args:
            request: Criteria, free-text query and pagination
            mapper: Optional function applied to every entity of the page
            searchable_fields: Overrides the instance's searchable fields for this call

        Returns:
            The requested page

        Raises:
            InvalidArgumentError: For unknown operators, fields or malformed values
            DBError: If the repository fails
        """
        specification = self.build_specification(request, searchable_fields)
        pagination = request.pagination
        self.logger.debug(
            f"Searching with {specification!r} (page={pagination.page}, "
            f"size={pagination.size}, sort={[str(order) for order in pagination.sort]})",
            extra={"page": pagination.page, "size": pagination.size},
        )

        page = self.repository.find_all(specification, pagination)
        content = [mapper(item) for item in page.content] if mapper else list(page.content)
        return PageResponse.of(content, page.total_elements, pagination.page, pagination.size)

    def search_params(
        self,
        query_params: QueryParams,
        filter_params: Optional[FilterParams] = None,
        search_params: Optional[SearchParams] = None,
        mapper: Optional[Mapper] = None,
    ) -> PageResponse:
        """
        Run a paged search from (validated) query, filter and search params.

        The totals of the result are recorded on ``query_params``.
        """
        request = SearchRequest.from_params(query_params, filter_params, search_params)
        result = self.search(request, mapper)
        query_params.update_pagination_info(result.total_elements)
        return result

    def count(
        self, request: SearchRequest, *, searchable_fields: Optional[Iterable[str]] = None
    ) -> int:
        return self.repository.count(self.build_specification(request, searchable_fields))

    def find_all(
        self, request: SearchRequest, *, searchable_fields: Optional[Iterable[str]] = None
    ) -> List[Any]:
        """Every entity matching the request, ignoring pagination."""
        return self.repository.find_all_matching(
            self.build_specification(request, searchable_fields)
        )
