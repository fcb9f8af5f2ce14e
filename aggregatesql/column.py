"""Flattened column metadata for an aggregate.

Each scalar leaf of an aggregate (possibly several value objects deep) is a
ColumnMapping; the value objects it sits under are ValueObjectNodes. The root
node of an aggregate has an empty path and owns the whole tree.
"""

from __future__ import annotations

from typing import Any, Iterator, Union

from pydantic import BaseModel, ConfigDict

from .reflection import PropertyDescriptor
from .utils.default_value import is_default_value


COLUMN_NAME_SEPARATOR = "_"


def qualify(path: tuple[PropertyDescriptor, ...]) -> str:
    """Join a property path into a column name (``address``, ``city`` -> ``address_city``)."""
    return COLUMN_NAME_SEPARATOR.join(prop.name for prop in path)


def read_path(path: tuple[PropertyDescriptor, ...], instance: Any) -> Any:
    """Follow path from instance; a None value object on the way yields None."""
    value = instance
    for prop in path:
        if value is None:
            return None
        value = prop.get_value(value)
    return value


class ColumnMapping(BaseModel):
    """A scalar leaf stored in exactly one column."""

    model_config = ConfigDict(frozen=True)

    qualified_name: str
    source_path: tuple[PropertyDescriptor, ...]
    is_key: bool = False
    is_identity: bool = False
    has_default_constraint: bool = False
    is_included_in_update: bool = True

    @property
    def leaf(self) -> PropertyDescriptor:
        """The leaf property."""
        return self.source_path[-1]

    @property
    def parameter(self) -> str:
        """Named placeholder bound to this column."""
        return "@" + self.qualified_name

    def get_value(self, aggregate: Any) -> Any:
        return read_path(self.source_path, aggregate)

    def has_default_value(self, aggregate: Any) -> bool:
        """True if the leaf still holds its type's default value on aggregate."""
        return is_default_value(self.get_value(aggregate), self.leaf.default_value)

    def __repr__(self) -> str:
        flags = [
            flag
            for flag, enabled in (
                ("key", self.is_key),
                ("identity", self.is_identity),
                ("default", self.has_default_constraint),
                ("readonly", not self.is_included_in_update),
            )
            if enabled
        ]
        return f"ColumnMapping({self.qualified_name!r}{', ' if flags else ''}{', '.join(flags)})"


class ValueObjectNode(BaseModel):
    """An intermediate node of the flattening tree; never a column itself."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    qualified_name: str
    source_path: tuple[PropertyDescriptor, ...]
    value_type: type
    children: tuple[Union[ColumnMapping, ValueObjectNode], ...] = ()

    def iter_columns(self) -> Iterator[ColumnMapping]:
        """Yield the leaf columns below this node, depth first, in declaration order."""
        for child in self.children:
            if isinstance(child, ValueObjectNode):
                yield from child.iter_columns()
            else:
                yield child
