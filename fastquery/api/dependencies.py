"""
FastAPI dependencies parsing search parameters from the query string.

Query string shape:
- ``page``, ``size``, ``sort_by``, ``sort_direction`` for pagination
- ``filter`` (repeatable) as ``field:operator:value``, or a JSON document
  ``{"filters": {"price": {"operator": "ge", "value": 10}}}``
- dot-notation filters, ``price.gte=10`` or ``owner.name.eq=Ada``
- ``q`` plus ``search_fields`` (repeatable or comma separated) for free text,
  or a JSON ``search`` document ``{"query": "lamp", "fields": ["name"]}``
  which takes priority over ``q``

When several filter forms name the same field, dot notation wins over
``field:operator:value`` strings, which win over JSON.

``ValidatedParams`` combines the three and validates them against an
entity's allow-list:

```python
validated = ValidatedParams(Product, validator)

@app.get("/products", response_model=PageResponse[ProductOut])
def list_products(
    params: SearchBundle = Depends(validated),
    session: Session = Depends(get_session),
):
    service = factory.get_service(Product, SqlAlchemyRepository(session, Product))
    return service.search(params.to_request(), mapper=ProductOut.model_validate)
```
"""

from dataclasses import dataclass, field
from typing import Hashable, List, Optional

from fastapi import Depends, Query, Request

from fastquery.query.criteria import SearchRequest
from fastquery.query.filtering import FilterParams
from fastquery.query.pagination import DEFAULT_SIZE, DEFAULT_SORT_FIELD, QueryParams
from fastquery.query.searching import SearchParams
from fastquery.query.validator import QueryParamValidator


def get_query_params(
    page: int = Query(0, ge=0, description="Page number (zero-based)"),
    size: int = Query(DEFAULT_SIZE, ge=1, description="Number of items per page"),
    sort_by: str = Query(DEFAULT_SORT_FIELD, description="Field to sort by"),
    sort_direction: str = Query(
        "DESC", description="Sort direction (ASC or DESC); invalid values mean DESC"
    ),
) -> QueryParams:
    return QueryParams(page=page, size=size, sort_by=sort_by, sort_direction=sort_direction)


def get_filter_params(
    filter: Optional[List[str]] = Query(
        None,
        description=(
            "Filter conditions in format 'field:operator:value'. "
            "Example: 'status:eq:active' or 'price:between:10,20'"
        ),
        examples=["status:eq:active", "price:gt:100"],
    ),
    request: Request = None,
) -> FilterParams:
    """
    Collect filters from ``filter`` values and dot-notation keys.

    A ``filter`` value starting with ``{`` is read as JSON; malformed JSON
    is logged and ignored.

    Raises:
        InvalidArgumentError: If a filter string is malformed or uses an unknown operator
    """
    # Handle both raw values and Query objects
    filter_value = getattr(filter, "default", filter) or []

    params = FilterParams()
    expressions = []
    for item in filter_value:
        if item.lstrip().startswith("{"):
            params.merge(FilterParams.from_json(item))
        else:
            expressions.append(item)
    params.merge(FilterParams.parse(expressions))

    if request is not None:
        params.merge(FilterParams.from_dot_notation(request.query_params.multi_items()))
    return params


def get_search_params(
    q: Optional[str] = Query(None, description="Free-text search query"),
    search_fields: Optional[List[str]] = Query(
        None, description="Fields to search in, repeatable or comma separated"
    ),
    search: Optional[str] = Query(
        None,
        description='Search as JSON, e.g. {"query": "lamp", "fields": ["name"]}',
    ),
) -> SearchParams:
    json_params = SearchParams.from_json(getattr(search, "default", search))
    if json_params.has_search():
        return json_params

    query = getattr(q, "default", q)
    raw_fields = getattr(search_fields, "default", search_fields) or []

    fields: List[str] = []
    for item in raw_fields:
        fields.extend(name.strip() for name in item.split(",") if name.strip())

    return SearchParams(query or None, fields)


@dataclass
class SearchBundle:
    """Validated pagination, filter and search parameters of one request."""

    query_params: QueryParams = field(default_factory=QueryParams)
    filter_params: FilterParams = field(default_factory=FilterParams)
    search_params: SearchParams = field(default_factory=SearchParams)

    def to_request(self) -> SearchRequest:
        return SearchRequest.from_params(
            self.query_params, self.filter_params, self.search_params
        )


class ValidatedParams:
    """
    Dependency parsing and validating search parameters for one entity type.

    Raises:
        InvalidArgumentError: For filter fields outside the entity's allow-list
    """

    def __init__(self, entity_type: Hashable, validator: QueryParamValidator):
        self.entity_type = entity_type
        self.validator = validator

    def __call__(
        self,
        query_params: QueryParams = Depends(get_query_params),
        filter_params: FilterParams = Depends(get_filter_params),
        search_params: SearchParams = Depends(get_search_params),
    ) -> SearchBundle:
        query_params, filter_params, search_params = self.validator.validate_all(
            query_params, filter_params, search_params, self.entity_type
        )
        return SearchBundle(query_params, filter_params, search_params)
