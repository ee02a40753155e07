"""
In-memory repository adapter.

Evaluates specifications item by item; useful for tests and for small,
static collections.

Limitations:
- Sorting uses the first value of a path; None sorts first ascending and
  last descending
"""

from functools import cmp_to_key
from typing import Any, Iterable, List, Optional

from fastquery.errors.exceptions import InvalidArgumentError
from fastquery.logging import Logger, ensure_logger
from fastquery.query.pagination import PageRequest, SortOrder
from fastquery.repository.base import Page, SearchRepository, T
from fastquery.specification.base import Specification, resolve_values


def _sort_value(item: Any, field: str) -> Any:
    values = resolve_values(item, field)
    return values[0] if values else None


def _compare(left: Any, right: Any, field: str) -> int:
    if left is None or right is None:
        return (left is not None) - (right is not None)
    try:
        return (left > right) - (left < right)
    except TypeError:
        raise InvalidArgumentError(f"Field '{field}' is not sortable", field=field)


class InMemoryRepository(SearchRepository[T]):
    def __init__(self, items: Optional[Iterable[T]] = None, logger: Optional[Logger] = None):
        self.items: List[T] = list(items or [])
        self.logger = ensure_logger(logger, __name__)

    def add(self, item: T) -> T:
        self.items.append(item)
        return item

    def _sorted(self, items: List[T], orders: Iterable[SortOrder]) -> List[T]:
        orders = list(orders)

        def compare(left: T, right: T) -> int:
            for order in orders:
                result = _compare(
                    _sort_value(left, order.field), _sort_value(right, order.field), order.field
                )
                if result:
                    return result if order.ascending else -result
            return 0

        return sorted(items, key=cmp_to_key(compare)) if orders else list(items)

    def find_all_matching(self, specification: Specification) -> List[T]:
        return [item for item in self.items if specification.is_satisfied_by(item)]

    def count(self, specification: Specification) -> int:
        return len(self.find_all_matching(specification))

    def find_all(self, specification: Specification, page_request: PageRequest) -> Page[T]:
        matching = self._sorted(self.find_all_matching(specification), page_request.sort)
        start = page_request.offset
        content = matching[start:start + page_request.size]
        self.logger.debug(
            f"Matched {len(matching)} of {len(self.items)} items, returning {len(content)}"
        )
        return Page(content, len(matching), page_request)
