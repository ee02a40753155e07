"""
Paged response schema.

PageResponse is the uniform result of a search: the mapped content of one
page plus the pagination metadata derived from the total element count.
Pages are zero-based.
"""

from math import ceil
from typing import Any, Callable, Generic, List, Sequence, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """
    One page of search results.

    Attributes:
        content: Ordered items of the current page
        page: Current page number (zero-based)
        size: Requested page size
        number_of_elements: Number of items actually on this page
        total_elements: Total number of matching items across all pages
        total_pages: ceil(total_elements / size), or 0 when size is 0
        has_next: Whether a page follows this one
        has_previous: Whether a page precedes this one
        first: Whether this is the first page
        last: Whether this is the last page
    """

    content: List[T] = Field(default_factory=list, description="Items of the current page")
    page: int = Field(default=0, ge=0, description="Current page number (zero-based)")
    size: int = Field(default=0, ge=0, description="Requested page size")
    number_of_elements: int = Field(default=0, description="Items on this page")
    total_elements: int = Field(default=0, ge=0, description="Total number of items")
    total_pages: int = Field(default=0, ge=0, description="Total number of pages")
    has_next: bool = Field(default=False, description="Whether there is a next page")
    has_previous: bool = Field(
        default=False, description="Whether there is a previous page"
    )
    first: bool = Field(default=True, description="Whether this is the first page")
    last: bool = Field(default=True, description="Whether this is the last page")

    @classmethod
    def of(
        cls, content: Sequence[T], total_elements: int, page: int, size: int
    ) -> "PageResponse[T]":
        """
        Build a page response and derive its navigation metadata.

        Args:
            content: Items of the current page
            total_elements: Total number of matching items
            page: Current page number (zero-based)
            size: Requested page size

        Returns:
            PageResponse with consistent metadata
        """
        total_pages = ceil(total_elements / size) if size > 0 else 0
        return cls(
            content=list(content),
            page=page,
            size=size,
            number_of_elements=len(content),
            total_elements=total_elements,
            total_pages=total_pages,
            has_next=page < total_pages - 1,
            has_previous=page > 0,
            first=page == 0,
            last=page >= total_pages - 1,
        )

    @classmethod
    def empty(cls) -> "PageResponse[T]":
        """Return a response with no content and zeroed metadata."""
        return cls.of([], 0, 0, 0)

    def map(self, fn: Callable[[T], Any]) -> "PageResponse[Any]":
        """Return a new response with each item transformed by ``fn``."""
        return PageResponse.of(
            [fn(item) for item in self.content],
            self.total_elements,
            self.page,
            self.size,
        )


# Backward compatibility
PagedResponse = PageResponse
