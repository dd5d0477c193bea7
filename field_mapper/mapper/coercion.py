"""
Type Coercion - Converts loosely-typed values into typed target fields

Rules, first match wins:
1. None stays None (the caller skips the write)
2. Enum target + text: case-insensitive member name lookup
3. date/datetime target + text: parse, unparseable text gives the type's minimum
4. Standard conversion to int/float/Decimal/bool/str, or passthrough when the
   value already has the target type
"""

import logging
import sys
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Union, get_args, get_origin

from field_mapper.errors import CoercionError
from field_mapper.mapper.loose import enum_text

logger = logging.getLogger(__name__)

if sys.version_info >= (3, 10):
    from types import UnionType
    _UNION_TYPES = (Union, UnionType)
else:
    _UNION_TYPES = (Union,)

# Tried after ISO-8601
DATE_FORMATS = [
    "%B %d, %Y",  # upstream air dates, e.g. "December 2, 2013"
    "%b %d, %Y",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y",
    "%d.%m.%Y",
]

TRUE_STRINGS = {"true"}
FALSE_STRINGS = {"false"}


def unwrap_optional(target_type: Any) -> Any:
    """Optional[X] -> X; other types are returned unchanged."""
    if get_origin(target_type) in _UNION_TYPES:
        args = [arg for arg in get_args(target_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return target_type


def parse_datetime(text: str) -> datetime:
    """
    Parse a date/time string

    Raises:
        ValueError: If no known format matches
    """
    candidate = text.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass

    for date_format in DATE_FORMATS:
        try:
            return datetime.strptime(candidate, date_format)
        except ValueError:
            continue

    raise ValueError(f"Unrecognized date: {text!r}")


class TypeCoercer:
    """Converts values to the declared type of a target field."""

    def coerce(self, value: Any, target_type: Any) -> Any:
        """
        Coerce a value to target_type

        Args:
            value: Transformed source value
            target_type: Declared type of the target field (may be Optional[...])

        Returns:
            Converted value, or None when value is None

        Raises:
            CoercionError: If no conversion applies
        """
        if value is None:
            return None

        target = unwrap_optional(target_type)
        if target is Any or target is None:
            return value

        if isinstance(target, type) and issubclass(target, Enum):
            return self._to_enum(value, target)

        if target in (datetime, date) and isinstance(value, str):
            return self._to_datetime(value, target)

        return self._convert(value, target)

    @staticmethod
    def _to_enum(value: Any, target: type) -> Enum:
        if isinstance(value, target):
            return value

        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in target:
                if member.name.lower() == wanted:
                    return member
            raise CoercionError(value, target, "no matching member")

        raise CoercionError(value, target, "enum members can only be parsed from text")

    @staticmethod
    def _to_datetime(value: str, target: type):
        try:
            parsed = parse_datetime(value)
        except ValueError:
            logger.debug(f"Unparseable date {value!r}, using {target.__name__}.min")
            return target.min

        return parsed.date() if target is date else parsed

    def _convert(self, value: Any, target: Any) -> Any:
        origin = get_origin(target)
        if origin is not None:
            return self._convert_generic(value, target, origin)

        if not isinstance(target, type):
            return value

        if target is bool:
            return self._to_bool(value)
        if target is int:
            return self._to_int(value)
        if target is float:
            return self._to_float(value)
        if target is Decimal:
            return self._to_decimal(value)
        if target is str:
            return self._to_str(value)

        if target is date and isinstance(value, datetime):
            return value.date()
        if isinstance(value, target):
            return value

        raise CoercionError(value, target, f"incompatible type {type(value).__name__}")

    @staticmethod
    def _convert_generic(value: Any, target: Any, origin: Any) -> Any:
        """Parametrized containers: accepted only when elements already match."""
        if not isinstance(origin, type) or not isinstance(value, origin):
            raise CoercionError(value, target, f"incompatible type {type(value).__name__}")

        args = get_args(target)
        if origin in (list, tuple, set, frozenset) and args and isinstance(args[0], type):
            item_type = args[0]
            if not all(isinstance(item, item_type) for item in value):
                raise CoercionError(value, target, f"elements are not {item_type.__name__}")

        return value

    @staticmethod
    def _to_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float, Decimal)):
            return value != 0
        if isinstance(value, str):
            text = value.strip().lower()
            if text in TRUE_STRINGS:
                return True
            if text in FALSE_STRINGS:
                return False
        raise CoercionError(value, bool)

    @staticmethod
    def _to_int(value: Any) -> int:
        if isinstance(value, Enum):
            raise CoercionError(value, int, "enum member")
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, (float, Decimal)):
            try:
                # round half to even
                return int(round(value))
            except (OverflowError, ValueError, InvalidOperation) as e:
                raise CoercionError(value, int, str(e)) from e
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError as e:
                raise CoercionError(value, int, "not an integer") from e
        raise CoercionError(value, int, f"incompatible type {type(value).__name__}")

    @staticmethod
    def _to_float(value: Any) -> float:
        if isinstance(value, (bool, int, float, Decimal)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError as e:
                raise CoercionError(value, float, "not a number") from e
        raise CoercionError(value, float, f"incompatible type {type(value).__name__}")

    @staticmethod
    def _to_decimal(value: Any) -> Decimal:
        if isinstance(value, Decimal):
            return value
        if isinstance(value, (bool, int, float, str)):
            try:
                return Decimal(str(value).strip())
            except InvalidOperation as e:
                raise CoercionError(value, Decimal, "not a number") from e
        raise CoercionError(value, Decimal, f"incompatible type {type(value).__name__}")

    @staticmethod
    def _to_str(value: Any) -> str:
        # before the str check: text-valued enums are str subclasses
        if isinstance(value, Enum):
            return enum_text(value)
        if isinstance(value, str):
            return value
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, (bool, int, float, Decimal)):
            return str(value)
        raise CoercionError(value, str, f"incompatible type {type(value).__name__}")
