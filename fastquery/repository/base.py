"""
Repository port used by the search service.

Adapters evaluate a specification against their storage and return the
requested page together with the total number of matches.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Generic, List, TypeVar

from fastquery.query.pagination import PageRequest
from fastquery.specification.base import Specification

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of results.

    Attributes:
        content: Items of the page
        total_elements: Number of matches across all pages
        request: The page request that produced this page
    """

    content: List[T] = field(default_factory=list)
    total_elements: int = 0
    request: PageRequest = field(default_factory=PageRequest)

    @property
    def total_pages(self) -> int:
        if self.request.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.request.size)

    def map(self, fn: Callable[[T], R]) -> "Page[R]":
        return Page([fn(item) for item in self.content], self.total_elements, self.request)


class SearchRepository(ABC, Generic[T]):
    """Read-only, specification driven access to one entity type."""

    @abstractmethod
    def find_all(self, specification: Specification, page_request: PageRequest) -> Page[T]:
        """Return the requested page of entities matching ``specification``."""

    @abstractmethod
    def find_all_matching(self, specification: Specification) -> List[T]:
        """Return every entity matching ``specification``, unpaginated."""

    @abstractmethod
    def count(self, specification: Specification) -> int:
        """Return the number of entities matching ``specification``."""
