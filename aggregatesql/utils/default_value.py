"""Zero value of a type, used to tell whether a property was left unset."""

import datetime
import decimal
import enum
import inspect
import uuid
from functools import cache
from typing import Any, get_origin

from .get_base_type import get_base_type


# checked in order: datetime is a subclass of date
_ZERO_FACTORIES: tuple[tuple[type, Any], ...] = (
    (datetime.datetime, lambda: datetime.datetime.min),
    (datetime.date, lambda: datetime.date.min),
    (datetime.time, lambda: datetime.time.min),
    (uuid.UUID, lambda: uuid.UUID(int=0)),
)

_ZERO_CONSTRUCTIBLE: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    decimal.Decimal,
    datetime.timedelta,
)


@cache
def get_default_value(annotation: Any) -> Any:
    """Return the default value for values annotated with ``annotation``.

    Scalar value types get their zero value (``0``, ``False``, ``datetime.min``...),
    everything else (strings, optional values, value objects, enums, other classes)
    gets None.
    """
    base_type, is_optional = get_base_type(annotation)
    if is_optional or get_origin(base_type) is not None or not inspect.isclass(base_type):
        return None
    if issubclass(base_type, enum.Enum):
        return None
    for zero_type, factory in _ZERO_FACTORIES:
        if issubclass(base_type, zero_type):
            return factory()
    if issubclass(base_type, _ZERO_CONSTRUCTIBLE):
        return base_type()
    return None


def is_default_value(value: Any, default: Any) -> bool:
    """True if value is, or equals, the default value of its type."""
    return value is default or value == default
