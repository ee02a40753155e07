"""
Conversion of raw (usually string) filter values to a field's Python type.

Query strings carry every value as text; before comparing, values are
converted to the type of the attribute or column they are compared with.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from fastquery.errors.exceptions import InvalidArgumentError

TRUE_VALUES = {"true", "1", "yes", "y", "on"}
FALSE_VALUES = {"false", "0", "no", "n", "off"}


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ValueError(f"not a boolean: {value}")
    return bool(value)


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    text = str(value).strip()
    if len(text) > 10:
        return _to_datetime(text).date()
    return date.fromisoformat(text)


def _to_enum(value: Any, enum_type: type) -> Enum:
    try:
        return enum_type(value)
    except ValueError:
        return enum_type[str(value)]


def coerce_value(value: Any, python_type: Optional[type], field: Optional[str] = None) -> Any:
    """
    Convert ``value`` to ``python_type``.

    None, values already of the target type and unknown target types are
    returned unchanged.

    Raises:
        InvalidArgumentError: If the value cannot be converted
    """
    if value is None or python_type is None:
        return value
    if isinstance(value, python_type) and not (
        python_type is int and isinstance(value, bool)
    ):
        return value

    try:
        if python_type is bool:
            return _to_bool(value)
        if python_type is int:
            if isinstance(value, str):
                return int(value.strip())
            return int(value)
        if python_type is float:
            return float(value)
        if python_type is Decimal:
            return Decimal(str(value).strip())
        if python_type is datetime:
            return _to_datetime(value)
        if python_type is date:
            return _to_date(value)
        if python_type is uuid.UUID:
            return uuid.UUID(str(value))
        if isinstance(python_type, type) and issubclass(python_type, Enum):
            return _to_enum(value, python_type)
        if python_type is str:
            return str(value)
    except (ValueError, TypeError, KeyError, InvalidOperation) as e:
        name = f" for field '{field}'" if field else ""
        raise InvalidArgumentError(
            f"Invalid value '{value}'{name}: expected {python_type.__name__}",
            field=field,
            details={"value": str(value), "error": str(e)},
        )

    return value
