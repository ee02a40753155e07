"""
Storage-independent specification (predicate) tree.

A specification describes which entities a search matches. It can be
evaluated in memory with ``is_satisfied_by`` or translated by a
repository adapter into a native query. Specifications compose with
``&``, ``|`` and ``~``.

Field names may be dotted paths (``owner.name``). When a step of the
path yields a collection, the comparison matches if any element does.

Limitations:
- Comparisons against a missing value (None) are false, except for the
  null checks and EXISTS, mirroring SQL semantics
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, List, Tuple, Union

from fastquery.errors.exceptions import InvalidArgumentError
from fastquery.query.filtering import FilterOperator, split_list_value
from fastquery.specification.coercion import coerce_value

_MISSING = object()


class Specification(ABC):
    """Base class of all specifications."""

    @abstractmethod
    def is_satisfied_by(self, candidate: Any) -> bool:
        """Return True if ``candidate`` matches this specification."""

    def __and__(self, other: "Specification") -> "Specification":
        return AndSpecification(self, other)

    def __or__(self, other: "Specification") -> "Specification":
        return OrSpecification(self, other)

    def __invert__(self) -> "Specification":
        return NotSpecification(self)


class MatchAll(Specification):
    """Specification matching every candidate."""

    def is_satisfied_by(self, candidate: Any) -> bool:
        return True

    def __and__(self, other: Specification) -> Specification:
        return other

    def __or__(self, other: Specification) -> Specification:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MatchAll)

    def __hash__(self) -> int:
        return hash(MatchAll)

    def __repr__(self) -> str:
        return "MatchAll()"


class _CompositeSpecification(Specification):
    def __init__(self, *specifications: Specification):
        flattened: List[Specification] = []
        for specification in specifications:
            if isinstance(specification, type(self)):
                flattened.extend(specification.specifications)
            else:
                flattened.append(specification)
        self.specifications: Tuple[Specification, ...] = tuple(flattened)

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.specifications == self.specifications

    def __hash__(self) -> int:
        return hash((type(self), self.specifications))

    def __repr__(self) -> str:
        inner = ", ".join(repr(spec) for spec in self.specifications)
        return f"{type(self).__name__}({inner})"


class AndSpecification(_CompositeSpecification):
    """Matches when every child matches; an empty conjunction matches everything."""

    def is_satisfied_by(self, candidate: Any) -> bool:
        return all(spec.is_satisfied_by(candidate) for spec in self.specifications)


class OrSpecification(_CompositeSpecification):
    """Matches when any child matches; an empty disjunction matches everything."""

    def is_satisfied_by(self, candidate: Any) -> bool:
        if not self.specifications:
            return True
        return any(spec.is_satisfied_by(candidate) for spec in self.specifications)


class NotSpecification(Specification):
    def __init__(self, specification: Specification):
        self.specification = specification

    def is_satisfied_by(self, candidate: Any) -> bool:
        return not self.specification.is_satisfied_by(candidate)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NotSpecification) and other.specification == self.specification

    def __hash__(self) -> int:
        return hash((NotSpecification, self.specification))

    def __repr__(self) -> str:
        return f"NotSpecification({self.specification!r})"


def _is_collection(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


def resolve_values(candidate: Any, path: str) -> List[Any]:
    """
    Resolve a dotted path against an object or mapping.

    Collections met along the way are fanned out, so the result lists
    every value reachable through the path.

    Raises:
        InvalidArgumentError: If an object has no attribute for a path step
    """
    values: List[Any] = [candidate]
    for part in path.split("."):
        resolved: List[Any] = []
        for value in values:
            if value is None:
                resolved.append(None)
                continue
            if isinstance(value, Mapping):
                item = value.get(part)
            else:
                item = getattr(value, part, _MISSING)
                if item is _MISSING:
                    raise InvalidArgumentError(
                        f"Unknown field '{path}' for {type(value).__name__}",
                        field=path,
                    )
            if _is_collection(item):
                resolved.extend(item)
            else:
                resolved.append(item)
        values = resolved
    return values


def like_to_regex(pattern: str) -> "re.Pattern[str]":
    """Compile a SQL LIKE pattern (``%`` and ``_`` wildcards) to a case-insensitive regex."""
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


class Comparison(Specification):
    """
    Compare one field against a value.

    Attributes:
        field: Attribute name or dotted path
        operator: FilterOperator
        value: Comparison value; a list for IN/NOT_IN, a (low, high) pair for BETWEEN

    Raises:
        InvalidArgumentError: For unknown operators or malformed list values
    """

    def __init__(self, field: str, operator: Union[FilterOperator, str], value: Any = None):
        self.field = field
        self.operator = FilterOperator.from_code(operator)

        if self.operator is FilterOperator.EQ and value is None:
            self.operator = FilterOperator.IS_NULL
        elif self.operator is FilterOperator.NE and value is None:
            self.operator = FilterOperator.IS_NOT_NULL

        self.value = self._normalize_value(value)

    def _normalize_value(self, value: Any) -> Any:
        operator = self.operator
        if operator in (FilterOperator.IN, FilterOperator.NOT_IN):
            value = split_list_value(value)
            if not isinstance(value, Iterable) or isinstance(value, (str, bytes)):
                value = [value]
            return list(value)
        if operator is FilterOperator.BETWEEN:
            value = split_list_value(value)
            if not _is_collection(value) or len(value) != 2:
                raise InvalidArgumentError(
                    f"BETWEEN on '{self.field}' requires exactly two values",
                    field=self.field,
                )
            return tuple(value)
        if operator in (
            FilterOperator.LIKE,
            FilterOperator.CONTAINS,
            FilterOperator.STARTS_WITH,
            FilterOperator.ENDS_WITH,
        ):
            if value is None:
                raise InvalidArgumentError(
                    f"Operator '{operator.value}' on '{self.field}' requires a value",
                    field=self.field,
                )
            return str(value)
        if operator is FilterOperator.EXISTS:
            return True if value is None else coerce_value(value, bool, self.field)
        if operator in (
            FilterOperator.GT,
            FilterOperator.GE,
            FilterOperator.LT,
            FilterOperator.LE,
        ) and value is None:
            raise InvalidArgumentError(
                f"Operator '{operator.value}' on '{self.field}' requires a value",
                field=self.field,
            )
        return value

    def _coerce(self, value: Any, actual: Any) -> Any:
        if value is None or actual is None:
            return value
        target = type(actual)
        if isinstance(value, str) or target is str:
            return coerce_value(value, target, self.field)
        return value

    def _matches(self, actual: Any) -> bool:
        operator = self.operator

        if operator is FilterOperator.IS_NULL:
            return actual is None
        if operator is FilterOperator.IS_NOT_NULL:
            return actual is not None
        if operator is FilterOperator.EXISTS:
            return (actual is not None) == self.value
        if actual is None:
            return False

        if operator is FilterOperator.IN:
            return any(actual == self._coerce(item, actual) for item in self.value)
        if operator is FilterOperator.NOT_IN:
            return all(actual != self._coerce(item, actual) for item in self.value)

        if operator in (
            FilterOperator.LIKE,
            FilterOperator.CONTAINS,
            FilterOperator.STARTS_WITH,
            FilterOperator.ENDS_WITH,
        ):
            text = str(actual.value if isinstance(actual, Enum) else actual).lower()
            needle = self.value.lower()
            if operator is FilterOperator.LIKE:
                if "%" in needle:
                    return like_to_regex(needle).fullmatch(text) is not None
                return needle in text
            if operator is FilterOperator.CONTAINS:
                return needle in text
            if operator is FilterOperator.STARTS_WITH:
                return text.startswith(needle)
            return text.endswith(needle)

        try:
            if operator is FilterOperator.BETWEEN:
                low, high = (self._coerce(item, actual) for item in self.value)
                return low <= actual <= high

            expected = self._coerce(self.value, actual)
            if operator is FilterOperator.EQ:
                return actual == expected
            if operator is FilterOperator.NE:
                return actual != expected
            if operator is FilterOperator.GT:
                return actual > expected
            if operator is FilterOperator.GE:
                return actual >= expected
            if operator is FilterOperator.LT:
                return actual < expected
            if operator is FilterOperator.LE:
                return actual <= expected
        except TypeError as e:
            raise InvalidArgumentError(
                f"Cannot compare field '{self.field}' with {self.value!r}",
                field=self.field,
                details={"error": str(e)},
            )

        return False

    def is_satisfied_by(self, candidate: Any) -> bool:
        return any(self._matches(value) for value in resolve_values(candidate, self.field))

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Comparison)
            and other.field == self.field
            and other.operator == self.operator
            and other.value == self.value
        )

    def __hash__(self) -> int:
        value = tuple(self.value) if isinstance(self.value, list) else self.value
        return hash((self.field, self.operator, value))

    def __repr__(self) -> str:
        return f"Comparison({self.field!r}, {self.operator.value!r}, {self.value!r})"
