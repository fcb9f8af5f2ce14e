"""Check whether a type is flattened into columns rather than stored in one."""

import dataclasses
import inspect
from typing import Iterable, get_origin

from pydantic import BaseModel


def is_structured_type(t: type) -> bool:
    """Return True if t is a dataclass or a Pydantic model class."""
    if get_origin(t) is not None or not inspect.isclass(t):
        return False
    return dataclasses.is_dataclass(t) or issubclass(t, BaseModel)


def is_value_object(t: type, registered: Iterable[type] = ()) -> bool:
    """Return True if t is a structured type or one of the registered value object types."""
    if get_origin(t) is not None or not inspect.isclass(t):
        return False
    return is_structured_type(t) or any(t is r for r in registered)
