"""
Pagination and sorting parameters.

QueryParams is the mutable, caller-facing form (page, size, one sort
field and direction). PageRequest is the immutable form handed to
repositories; it may carry several sort orders.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from fastquery.errors.exceptions import InvalidArgumentError

DEFAULT_PAGE = 0
DEFAULT_SIZE = 10
DEFAULT_SORT_FIELD = "created_at"


class SortDirection(str, Enum):
    """
    Sort direction options.

    Attributes:
        ASC: Ascending order (A-Z, 0-9)
        DESC: Descending order (Z-A, 9-0)
    """

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(
        cls, value: Union["SortDirection", str, None], default: Optional["SortDirection"] = None
    ) -> "SortDirection":
        """
        Resolve a direction case-insensitively.

        Unknown or missing values fall back to ``default`` (DESC).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        return default or cls.DESC


@dataclass(frozen=True)
class SortOrder:
    """A single sort field with its direction."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASC

    @classmethod
    def parse(cls, value: str) -> "SortOrder":
        """
        Parse ``field``, ``field,direction`` or ``field:direction``.

        A missing direction means ascending; an invalid one means descending.
        """
        for separator in (",", ":"):
            if separator in value:
                name, direction = value.split(separator, 1)
                return cls(name.strip(), SortDirection.parse(direction))
        return cls(value.strip(), SortDirection.ASC)

    def __str__(self) -> str:
        return f"{self.field},{self.direction.value}"


@dataclass(frozen=True)
class PageRequest:
    """
    Immutable page request handed to repositories.

    Attributes:
        page: Zero-based page index
        size: Maximum items per page
        sort: Sort orders applied in sequence
    """

    page: int = DEFAULT_PAGE
    size: int = DEFAULT_SIZE
    sort: Tuple[SortOrder, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.page < 0:
            raise InvalidArgumentError("Page index must not be negative", field="page")
        if self.size < 0:
            raise InvalidArgumentError("Page size must not be negative", field="size")
        object.__setattr__(self, "sort", tuple(self.sort))

    @property
    def offset(self) -> int:
        return self.page * self.size

    @classmethod
    def of(
        cls,
        page: int = DEFAULT_PAGE,
        size: int = DEFAULT_SIZE,
        sort: Optional[Iterable[Union[SortOrder, str]]] = None,
    ) -> "PageRequest":
        """Build a page request, parsing sort strings like ``"name,desc"``."""
        orders = tuple(
            order if isinstance(order, SortOrder) else SortOrder.parse(order)
            for order in (sort or ())
        )
        return cls(page, size, orders)

    def next(self) -> "PageRequest":
        return PageRequest(self.page + 1, self.size, self.sort)


class QueryParams:
    """
    Pagination and sorting parameters of a search request.

    Attributes:
        page: Zero-based page index (default 0)
        size: Page size (default 10)
        sort_by: Field to sort by
        sort_direction: ASC or DESC; invalid values degrade to DESC
        total_elements: Total matches, recorded after a search
        total_pages: Total pages, recorded after a search
    """

    def __init__(
        self,
        page: int = DEFAULT_PAGE,
        size: int = DEFAULT_SIZE,
        sort_by: Optional[str] = DEFAULT_SORT_FIELD,
        sort_direction: Union[SortDirection, str, None] = SortDirection.DESC,
    ):
        self.page = page
        self.size = size
        self.sort_by = sort_by
        self.sort_direction = SortDirection.parse(sort_direction)
        self.total_elements: Optional[int] = None
        self.total_pages: Optional[int] = None

    def to_page_request(self) -> PageRequest:
        sort = (SortOrder(self.sort_by, self.sort_direction),) if self.sort_by else ()
        return PageRequest(max(self.page, 0), max(self.size, 0), sort)

    def update_pagination_info(self, total_elements: int) -> None:
        """Record the total element and page counts of a finished search."""
        self.total_elements = total_elements
        self.total_pages = math.ceil(total_elements / self.size) if self.size > 0 else 0

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            "page": self.page,
            "size": self.size,
            "sort_by": self.sort_by,
            "sort_direction": self.sort_direction.value,
        }
        if self.total_elements is not None:
            data["total_elements"] = self.total_elements
            data["total_pages"] = self.total_pages
        return data

    def __repr__(self) -> str:
        return (
            f"QueryParams(page={self.page}, size={self.size}, "
            f"sort_by={self.sort_by!r}, sort_direction={self.sort_direction.value})"
        )
