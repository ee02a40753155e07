"""
Per-entity allow-lists of sortable, filterable and searchable fields.

Allow-lists are declared once, at import time, in an explicit registry:

```python
registry = SupportedParamsRegistry()

@registry.supported_params(
    sort_fields=["name", "created_at"],
    filter_fields=["category", "status"],
    search_fields=["name", "description"],
    max_page_size=50,
)
class Product(BaseModel):
    ...
```
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, Optional, Tuple, TypeVar

from fastquery.errors.exceptions import InvalidArgumentError

T = TypeVar("T")

DEFAULT_MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class SupportedParams:
    """
    Fields an entity allows in sort, filter and search positions.

    Attributes:
        allowed_sort_fields: Sortable fields; the first one is the sort fallback
        allowed_filter_fields: Filterable fields
        allowed_search_fields: Free-text searchable fields
        max_page_size: Upper bound for the page size
    """

    allowed_sort_fields: Tuple[str, ...] = ()
    allowed_filter_fields: Tuple[str, ...] = ()
    allowed_search_fields: Tuple[str, ...] = ()
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE

    def __post_init__(self):
        for name in ("allowed_sort_fields", "allowed_filter_fields", "allowed_search_fields"):
            value = getattr(self, name)
            if isinstance(value, str):
                value = (value,)
            object.__setattr__(self, name, tuple(value))
        if self.max_page_size < 1:
            raise InvalidArgumentError(
                "max_page_size must be at least 1", field="max_page_size"
            )

    def allows_sort(self, field: str) -> bool:
        return field in self.allowed_sort_fields

    def allows_filter(self, field: str) -> bool:
        return field in self.allowed_filter_fields

    def allows_search(self, field: str) -> bool:
        return field in self.allowed_search_fields


class SupportedParamsRegistry:
    """
    Explicit mapping of entity type to its SupportedParams.

    Entity types are any hashable key, usually the model class or its name.
    Registration happens at import time; lookups are read-only.
    """

    def __init__(self, entries: Optional[Dict[Hashable, SupportedParams]] = None):
        self._entries: Dict[Hashable, SupportedParams] = dict(entries or {})
        self._lock = threading.Lock()

    def register(self, entity_type: Hashable, params: SupportedParams) -> SupportedParams:
        with self._lock:
            self._entries[entity_type] = params
        return params

    def get(self, entity_type: Hashable) -> Optional[SupportedParams]:
        """Return the allow-list for ``entity_type``, or None when none was declared."""
        return self._entries.get(entity_type)

    def entity_types(self) -> Tuple[Hashable, ...]:
        return tuple(self._entries)

    def supported_params(
        self,
        sort_fields: Iterable[str] = (),
        filter_fields: Iterable[str] = (),
        search_fields: Iterable[str] = (),
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ) -> Callable[[T], T]:
        """Class decorator registering the decorated class's allow-list."""
        params = SupportedParams(
            tuple(sort_fields), tuple(filter_fields), tuple(search_fields), max_page_size
        )

        def decorator(cls: T) -> T:
            self.register(cls, params)
            return cls

        return decorator

    def __contains__(self, entity_type: Any) -> bool:
        return entity_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)
