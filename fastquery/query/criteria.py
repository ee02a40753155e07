"""
Search criteria and search requests.

SearchCriteria is a single ``field operator value`` predicate; the
SearchRequest bundles criteria, free-text search and pagination into the
one object the search service consumes. Criteria can be written in a
compact symbolic form, e.g. ``price>=10``, ``name:lamp`` or
``status@new,open``.

Limitations:
- The per-criterion combinator is stored but criteria are always
  AND-combined when compiled; OR is only produced by free-text expansion
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from fastquery.query.filtering import FilterOperator, FilterParams, split_list_value
from fastquery.query.pagination import PageRequest, QueryParams
from fastquery.query.searching import SearchParams

ALL_FIELDS = "_all"


class SearchOperator(str, Enum):
    """Symbolic operators accepted by ``SearchCriteria.parse``."""

    EQUALS = "="
    NOT_EQUALS = "!"
    NOT_EQUALS_SIGN = "!="
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_THAN_EQUAL = ">="
    LESS_THAN_EQUAL = "<="
    LIKE = ":"
    STARTS_WITH = "^"
    ENDS_WITH = "$"
    IN = "@"
    BETWEEN = "~"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def filter_operator(self) -> FilterOperator:
        return FilterOperator.from_code(self.value)


class Combinator(str, Enum):
    AND = "AND"
    OR = "OR"


def _strip_quotes(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


@dataclass
class SearchCriteria:
    """
    A single search predicate.

    Attributes:
        field: Entity attribute, possibly a dotted path; ``_all`` means
            every searchable field
        operator: FilterOperator, SearchOperator or raw operator code
        value: Value to compare with
        combinator: How the criterion joins its neighbours (kept as data)
    """

    field: str
    operator: Union[FilterOperator, SearchOperator, str]
    value: Any = None
    combinator: Combinator = Combinator.AND

    @classmethod
    def parse(cls, expression: str) -> "SearchCriteria":
        """
        Parse the symbolic form ``<field><symbol><value>``.

        The earliest symbol wins; when two symbols start at the same index
        the longer one wins, so ``a>=1`` is "greater than or equal". Text
        without any symbol becomes a free-text match over all fields.
        """
        expression = expression.strip()
        best: Optional[SearchOperator] = None
        best_index = -1

        for operator in SearchOperator:
            index = expression.find(operator.symbol)
            if index <= 0:
                continue
            if (
                best is None
                or index < best_index
                or (index == best_index and len(operator.symbol) > len(best.symbol))
            ):
                best, best_index = operator, index

        if best is None:
            return cls(ALL_FIELDS, FilterOperator.LIKE, _strip_quotes(expression))

        name = expression[:best_index].strip()
        raw_value = _strip_quotes(expression[best_index + len(best.symbol):])
        operator = best.filter_operator

        value: Any = raw_value
        if operator is FilterOperator.IN:
            value = split_list_value(raw_value)
        elif operator is FilterOperator.BETWEEN:
            value = split_list_value(raw_value)[:2]

        return cls(name, operator, value)

    def __str__(self) -> str:
        operator = self.operator.value if isinstance(self.operator, Enum) else self.operator
        return f"{self.field} {operator} {self.value!r}"


@dataclass
class SearchRequest:
    """
    Everything needed to run one search.

    Attributes:
        pagination: Page index, size and sort orders
        criteria: Predicates, AND-combined
        query: Free-text query matched against ``search_fields``
        filters: Plain equality filters, keyed by field
        search_fields: Fields the free-text query is matched against
    """

    pagination: PageRequest = field(default_factory=PageRequest)
    criteria: List[SearchCriteria] = field(default_factory=list)
    query: Optional[str] = None
    filters: Dict[str, Any] = field(default_factory=dict)
    search_fields: List[str] = field(default_factory=list)

    def add_criterion(self, criterion: Union[SearchCriteria, str]) -> "SearchRequest":
        if isinstance(criterion, str):
            criterion = SearchCriteria.parse(criterion)
        self.criteria.append(criterion)
        return self

    def add_filter(self, field_name: str, value: Any) -> "SearchRequest":
        self.filters[field_name] = value
        return self

    def has_query(self) -> bool:
        return bool(self.query and self.query.strip())

    def all_criteria(self) -> List[SearchCriteria]:
        """Criteria followed by equality criteria for ``filters``."""
        return self.criteria + [
            SearchCriteria(name, FilterOperator.EQ, value)
            for name, value in self.filters.items()
        ]

    @staticmethod
    def parse_query_string(query_string: Optional[str]) -> List[SearchCriteria]:
        """
        Split a query string on spaces outside double quotes and parse each term.

        Example:
            ``'name:lamp price>=10 "red shade"'`` yields three criteria, the
            last a free-text match on ``red shade``.
        """
        if not query_string or not query_string.strip():
            return []

        terms: List[str] = []
        current: List[str] = []
        in_quotes = False

        for char in query_string:
            if char == '"':
                in_quotes = not in_quotes
                current.append(char)
            elif char == " " and not in_quotes:
                if current:
                    terms.append("".join(current))
                    current = []
            else:
                current.append(char)
        if current:
            terms.append("".join(current))

        return [SearchCriteria.parse(term) for term in terms if term.strip()]

    @classmethod
    def from_query_string(
        cls, query_string: Optional[str], pagination: Optional[PageRequest] = None
    ) -> "SearchRequest":
        return cls(
            pagination=pagination or PageRequest(),
            criteria=cls.parse_query_string(query_string),
        )

    @classmethod
    def from_params(
        cls,
        query_params: Optional[QueryParams] = None,
        filter_params: Optional[FilterParams] = None,
        search_params: Optional[SearchParams] = None,
    ) -> "SearchRequest":
        """Build a request from (already validated) query, filter and search params."""
        query_params = query_params or QueryParams()
        request = cls(pagination=query_params.to_page_request())

        if filter_params is not None:
            for condition in filter_params.get_filter_conditions():
                request.add_criterion(
                    SearchCriteria(condition.field, condition.operator, condition.value)
                )

        if search_params is not None and search_params.has_search():
            request.query = search_params.query
            request.search_fields = list(search_params.fields)

        return request
