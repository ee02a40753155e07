"""
Free-text search parameters.

A search is a query string matched (case-insensitively, anywhere in the
value) against an ordered list of fields.
"""

import json
from typing import Iterable, List, Optional

from fastquery.logging import Logger, ensure_logger


class SearchParams:
    """
    Free-text query plus the fields it is matched against.

    Attributes:
        query: Text to search for, or None
        fields: Ordered field names to search in
    """

    def __init__(self, query: Optional[str] = None, fields: Optional[Iterable[str]] = None):
        self.query = query
        self.fields: List[str] = list(fields or [])

    def has_search(self) -> bool:
        """True when there is both a non-empty query and at least one field."""
        return bool(self.query and self.query.strip()) and bool(self.fields)

    def add_field(self, field: str) -> "SearchParams":
        if field not in self.fields:
            self.fields.append(field)
        return self

    def to_dict(self):
        return {"query": self.query, "fields": list(self.fields)}

    @classmethod
    def from_json(
        cls, source: Optional[str], logger: Optional[Logger] = None
    ) -> "SearchParams":
        """
        Create search parameters from ``{"query": "...", "fields": [...]}``.

        Malformed input yields empty parameters and a warning.
        """
        if not source:
            return cls()
        try:
            payload = json.loads(source)
            fields = payload.get("fields") or []
            if isinstance(fields, str):
                raise TypeError("fields must be a list")
            return cls(payload.get("query"), [str(field) for field in fields])
        except (ValueError, TypeError, AttributeError) as e:
            log = ensure_logger(logger, __name__)
            log.warning(f"Error converting search params: {e}")
            return cls()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchParams):
            return NotImplemented
        return self.query == other.query and self.fields == other.fields

    def __repr__(self) -> str:
        return f"SearchParams(query={self.query!r}, fields={self.fields!r})"
