"""
Specifications: storage-independent predicates over entities, and the
builder that compiles search criteria into them.
"""

from fastquery.specification.base import (
    AndSpecification,
    Comparison,
    MatchAll,
    NotSpecification,
    OrSpecification,
    Specification,
    resolve_values,
)
from fastquery.specification.builder import (
    SpecificationBuilder,
    build_specification,
    combine,
    text_search,
)
from fastquery.specification.coercion import coerce_value

__all__ = [
    "AndSpecification",
    "Comparison",
    "MatchAll",
    "NotSpecification",
    "OrSpecification",
    "Specification",
    "SpecificationBuilder",
    "build_specification",
    "coerce_value",
    "combine",
    "resolve_values",
    "text_search",
]
