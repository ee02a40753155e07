"""
Compilation of search criteria into a specification.

Every criterion becomes one comparison and all comparisons are
AND-combined. The pseudo field ``_all`` (and a request's free-text
query) expands into an OR of case-insensitive LIKE comparisons over the
searchable fields.
"""

from typing import Iterable, List, Optional, Sequence, Union

from fastquery.query.criteria import ALL_FIELDS, SearchCriteria, SearchRequest
from fastquery.query.filtering import FilterOperator, FilterParams
from fastquery.query.searching import SearchParams
from fastquery.specification.base import (
    AndSpecification,
    Comparison,
    MatchAll,
    OrSpecification,
    Specification,
)

Criterion = Union[SearchCriteria, Specification, str]


def text_search(text: str, fields: Sequence[str]) -> Specification:
    """OR of case-insensitive LIKE comparisons of ``text`` over ``fields``; MatchAll when there are no fields."""
    if not fields:
        return MatchAll()
    comparisons = [Comparison(field, FilterOperator.LIKE, text) for field in fields]
    if len(comparisons) == 1:
        return comparisons[0]
    return OrSpecification(*comparisons)


def combine(specifications: Iterable[Specification]) -> Specification:
    """AND-combine specifications, skipping MatchAll."""
    fragments = [spec for spec in specifications if not isinstance(spec, MatchAll)]
    if not fragments:
        return MatchAll()
    if len(fragments) == 1:
        return fragments[0]
    return AndSpecification(*fragments)


class SpecificationBuilder:
    """
    Fluent builder turning criteria into one specification.

    Example:
        ```python
        spec = (
            SpecificationBuilder()
            .with_searchable_fields("name", "description")
            .with_(SearchCriteria("price", FilterOperator.GE, 10))
            .with_if(query is not None, SearchCriteria("_all", "like", query))
            .build()
        )
        ```
    """

    def __init__(self, searchable_fields: Iterable[str] = ()):
        self.searchable_fields: tuple = tuple(searchable_fields)
        self.criteria: List[Criterion] = []

    def with_searchable_fields(self, *fields: str) -> "SpecificationBuilder":
        self.searchable_fields = tuple(fields)
        return self

    def with_(self, criterion: Criterion) -> "SpecificationBuilder":
        """Add a criterion: a SearchCriteria, a ready specification or a symbolic string."""
        if isinstance(criterion, str):
            criterion = SearchCriteria.parse(criterion)
        self.criteria.append(criterion)
        return self

    def with_if(self, condition: bool, criterion: Criterion) -> "SpecificationBuilder":
        if condition:
            self.with_(criterion)
        return self

    def with_all(self, criteria: Iterable[Criterion]) -> "SpecificationBuilder":
        for criterion in criteria:
            self.with_(criterion)
        return self

    def _to_specification(self, criterion: Criterion) -> Specification:
        if isinstance(criterion, Specification):
            return criterion
        if criterion.field == ALL_FIELDS:
            if criterion.value is None or not str(criterion.value).strip():
                return MatchAll()
            return text_search(str(criterion.value), self.searchable_fields)
        return Comparison(criterion.field, criterion.operator, criterion.value)

    def build(self) -> Specification:
        """
        Build the AND-combination of all criteria.

        Returns:
            The combined specification, MatchAll when there are no criteria

        Raises:
            InvalidArgumentError: If a criterion has an unknown operator or malformed value
        """
        return combine(self._to_specification(criterion) for criterion in self.criteria)

    @classmethod
    def from_request(
        cls, request: SearchRequest, searchable_fields: Iterable[str] = ()
    ) -> "SpecificationBuilder":
        """
        Builder loaded with a request's criteria, filters and free-text query.

        The query is matched against the request's search fields, or the
        given searchable fields when the request names none.
        """
        builder = cls(searchable_fields).with_all(request.all_criteria())
        if request.has_query():
            fields = request.search_fields or builder.searchable_fields
            builder.with_(text_search(request.query, fields))
        return builder


def build_specification(
    filter_params: Optional[FilterParams] = None,
    search_params: Optional[SearchParams] = None,
) -> Specification:
    """
    Compile filter and search parameters into one specification.

    Filters are AND-combined; the search query is OR-matched across the
    search fields; both parts are AND-combined.
    """
    builder = SpecificationBuilder()
    if filter_params is not None:
        for condition in filter_params.get_filter_conditions():
            builder.with_(SearchCriteria(condition.field, condition.operator, condition.value))
    if search_params is not None and search_params.has_search():
        builder.with_(text_search(search_params.query, search_params.fields))
    return builder.build()
