"""
Filtering model for search requests.

This module provides the filter operator vocabulary, single filter
conditions and the FilterParams mapping (one condition per field) that
callers hand to the validator and the specification builder.
"""

import json
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from fastquery.errors.exceptions import InvalidArgumentError
from fastquery.logging import Logger, ensure_logger


class FilterOperator(str, Enum):
    """
    Filter operators for field comparisons.

    Attributes:
        EQ: Equal to
        NE: Not equal to
        GT: Greater than
        GE: Greater than or equal to
        LT: Less than
        LE: Less than or equal to
        IN: In a list of values
        NOT_IN: Not in a list of values
        BETWEEN: Inclusive range given as two values
        LIKE: Case-insensitive pattern match; ``%`` wildcards are honoured,
            otherwise the value is matched anywhere in the field
        EXISTS: Field is set (truthy value) or unset (falsy value)
        CONTAINS: Case-insensitive literal substring
        STARTS_WITH: Case-insensitive prefix
        ENDS_WITH: Case-insensitive suffix
        IS_NULL: Is NULL
        IS_NOT_NULL: Is not NULL
    """

    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"
    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"
    LIKE = "like"
    EXISTS = "exists"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    @classmethod
    def from_code(cls, code: Union["FilterOperator", str]) -> "FilterOperator":
        """
        Resolve an operator from its value, name, long name or symbol.

        Args:
            code: Operator code such as ``"ge"``, ``"GREATER_THAN_EQUAL"`` or ``">="``

        Returns:
            The matching FilterOperator

        Raises:
            InvalidArgumentError: If the code is unknown
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, str):
            key = code.strip()
            operator = _OPERATOR_ALIASES.get(key) or _OPERATOR_ALIASES.get(key.lower())
            if operator is not None:
                return operator
        valid_operators = ", ".join(op.value for op in cls)
        raise InvalidArgumentError(
            f"Invalid filter operator: {code}. Allowed operators are: {valid_operators}",
            details={"operator": str(code)},
        )

    @property
    def takes_value(self) -> bool:
        """Whether the operator compares against a value."""
        return self not in (FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL)

    @property
    def takes_list(self) -> bool:
        """Whether the operator expects a sequence of values."""
        return self in (FilterOperator.IN, FilterOperator.NOT_IN, FilterOperator.BETWEEN)


_OPERATOR_ALIASES: Dict[str, FilterOperator] = {
    **{op.value: op for op in FilterOperator},
    "equals": FilterOperator.EQ,
    "not_equals": FilterOperator.NE,
    "neq": FilterOperator.NE,
    "gte": FilterOperator.GE,
    "lte": FilterOperator.LE,
    "greater_than": FilterOperator.GT,
    "greater_than_equal": FilterOperator.GE,
    "greater_equal": FilterOperator.GE,
    "less_than": FilterOperator.LT,
    "less_than_equal": FilterOperator.LE,
    "less_equal": FilterOperator.LE,
    "=": FilterOperator.EQ,
    "!": FilterOperator.NE,
    "!=": FilterOperator.NE,
    ">": FilterOperator.GT,
    ">=": FilterOperator.GE,
    "<": FilterOperator.LT,
    "<=": FilterOperator.LE,
    ":": FilterOperator.LIKE,
    "^": FilterOperator.STARTS_WITH,
    "$": FilterOperator.ENDS_WITH,
    "@": FilterOperator.IN,
    "~": FilterOperator.BETWEEN,
}


def split_list_value(value: Any) -> Any:
    """Turn a comma separated string into a list of stripped items."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",")]
    return value


class FilterCondition:
    """
    Filter condition for a field.

    The operator is kept as given; codes are resolved (and rejected when
    unknown) when the condition is compiled into a specification.

    Attributes:
        field: Field name to filter on
        operator: Filter operator (FilterOperator or raw code)
        value: Value to compare with
    """

    def __init__(
        self,
        field: str,
        operator: Union[FilterOperator, str],
        value: Any = None,
    ):
        self.field = field
        self.operator = operator
        self.value = value

    @property
    def operator_code(self) -> str:
        if isinstance(self.operator, FilterOperator):
            return self.operator.value
        return str(self.operator)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert filter condition to dictionary.

        Returns:
            Dictionary with field, operator, and value
        """
        return {
            "field": self.field,
            "operator": self.operator_code,
            "value": self.value,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterCondition):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        if self.operator in (FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL):
            return f"{self.field}:{self.operator_code}"
        return f"{self.field}:{self.operator_code}:{self.value}"

    def __repr__(self) -> str:
        return (
            f"FilterCondition(field='{self.field}', "
            f"operator={self.operator}, value={repr(self.value)})"
        )


# Dotted query-string keys that never name a filter
RESERVED_DOT_PREFIXES = ("sort.", "page.")


class FilterParams:
    """
    Filter predicates of a search request, keyed by field name.

    Each field carries exactly one condition; adding a second condition
    for the same field replaces the first.

    Example:
        ```python
        params = FilterParams()
        params.add_filter("category", FilterOperator.EQ, "verbs")
        params.add_filter("level", "between", [1, 3])
        ```
    """

    def __init__(self, filters: Optional[Dict[str, FilterCondition]] = None):
        self.filters: Dict[str, FilterCondition] = dict(filters or {})

    def has_filters(self) -> bool:
        return bool(self.filters)

    def add_filter(
        self, field: str, operator: Union[FilterOperator, str], value: Any = None
    ) -> "FilterParams":
        """Add (or replace) the condition for ``field``."""
        self.filters[field] = FilterCondition(field, operator, value)
        return self

    def get_filter(self, field: str) -> Optional[FilterCondition]:
        return self.filters.get(field)

    def remove_filter(self, field: str) -> None:
        self.filters.pop(field, None)

    def get_filter_conditions(self) -> List[FilterCondition]:
        """Return the conditions in insertion order."""
        return list(self.filters.values())

    def fields(self) -> List[str]:
        return list(self.filters.keys())

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """
        Convert filter parameters to the JSON shape accepted by ``from_json``.
        """
        return {
            "filters": {
                field: {"operator": condition.operator_code, "value": condition.value}
                for field, condition in self.filters.items()
            }
        }

    @classmethod
    def parse(cls, filter_strings: Optional[Iterable[str]]) -> "FilterParams":
        """
        Create filter parameters from strings in ``field:operator:value`` form.

        Colons after the operator belong to the value. Values of ``in``,
        ``not_in`` and ``between`` are comma separated lists.

        Args:
            filter_strings: Filter strings, e.g. ``["status:eq:active"]``

        Returns:
            Parsed FilterParams

        Raises:
            InvalidArgumentError: If a string is malformed or names an unknown operator
        """
        instance = cls()

        for filter_string in filter_strings or []:
            parts = filter_string.split(":")

            if len(parts) < 2 or not parts[0].strip():
                raise InvalidArgumentError(
                    f"Invalid filter format: {filter_string}. "
                    f"Expected format: field:operator:value"
                )

            field = parts[0].strip()
            operator = FilterOperator.from_code(parts[1])

            if not operator.takes_value:
                instance.add_filter(field, operator)
                continue

            if len(parts) < 3:
                raise InvalidArgumentError(
                    f"Missing value for filter: {filter_string}. "
                    f"Expected format: field:operator:value",
                    field=field,
                )

            value: Any = ":".join(parts[2:])
            if operator.takes_list:
                value = split_list_value(value)

            instance.add_filter(field, operator, value)

        return instance

    @classmethod
    def from_dot_notation(cls, items: Iterable[Tuple[str, str]]) -> "FilterParams":
        """
        Create filter parameters from ``field.operator=value`` pairs.

        The operator is the part after the last dot, so nested paths work:
        ``owner.name.eq=Ada``. Keys without a dot and keys starting with
        ``sort.`` or ``page.`` are skipped. Besides the codes known to
        ``FilterOperator.from_code``, ``neq``, ``gte`` and ``lte`` are accepted.

        Args:
            items: Query-string pairs, e.g. ``request.query_params.multi_items()``

        Raises:
            InvalidArgumentError: If a dotted key names an unknown operator
        """
        instance = cls()

        for key, raw_value in items:
            if "." not in key or key.startswith(RESERVED_DOT_PREFIXES):
                continue

            field, code = key.rsplit(".", 1)
            if not field or not code:
                continue

            operator = FilterOperator.from_code(code)
            value: Any = raw_value
            if not operator.takes_value:
                value = None
            elif operator.takes_list:
                value = split_list_value(raw_value)

            instance.add_filter(field, operator, value)

        return instance

    def merge(self, other: "FilterParams") -> "FilterParams":
        """Add every condition of ``other``, replacing conditions on the same field."""
        self.filters.update(other.filters)
        return self

    @classmethod
    def from_json(
        cls, source: Optional[str], logger: Optional[Logger] = None
    ) -> "FilterParams":
        """
        Create filter parameters from a JSON document.

        Expected shape: ``{"filters": {"field": {"operator": "eq", "value": 1}}}``.
        Malformed input yields empty parameters and a warning.
        """
        if not source:
            return cls()
        try:
            payload = json.loads(source)
            instance = cls()
            for field, data in payload.get("filters", {}).items():
                instance.add_filter(field, data["operator"], data.get("value"))
            return instance
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            log = ensure_logger(logger, __name__)
            log.warning(f"Error converting filter params: {e}")
            return cls()

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        return f"FilterParams(filters={self.get_filter_conditions()!r})"
