"""Declarative mapping of an aggregate type onto a table.

Usage::

    config = TableAggregateConfiguration(User, table_name="users")
    config.has_key("id").has_identity("id").has_default("date_created")
    mapping = config.build()

Property paths are attribute names, dotted to reach into value objects
(``"address.city"``). A role declared on a path applies to every column below it,
so a value object used as a key contributes all of its leaves as key columns.
Building only flattens the aggregate into columns; validating the table itself
and generating SQL is the job of the query generator.
"""

import logging
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from .column import ColumnMapping, ValueObjectNode, qualify
from .exceptions import ConfigurationError, InvariantViolation
from .reflection import PropertyDescriptor, TypePropertiesCache, default_properties_cache
from .utils.is_value_object import is_value_object

logger = logging.getLogger("aggregatesql")


class DefaultConfiguration(BaseModel):
    """Application-wide defaults, applied with ``TableAggregateConfiguration.set_defaults``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    default_schema: Optional[str] = None
    dialect: Optional[str] = None
    """URL scheme of the dialect (e.g. 'mysql', 'postgresql', 'mssql')."""
    value_object_types: tuple[type, ...] = ()
    """Plain classes to flatten in addition to dataclasses and Pydantic models."""


class AggregateConfiguration(BaseModel):
    """Immutable, flattened mapping of one aggregate type, produced by ``build()``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    aggregate_type: type
    entity_name: Optional[str]
    schema_name: Optional[str] = None
    dialect: Optional[str] = None
    root: ValueObjectNode
    columns: tuple[ColumnMapping, ...]

    @property
    def key_columns(self) -> tuple[ColumnMapping, ...]:
        return tuple(column for column in self.columns if column.is_key)

    @property
    def identity_columns(self) -> tuple[ColumnMapping, ...]:
        return tuple(column for column in self.columns if column.is_identity)

    @property
    def default_constraint_columns(self) -> tuple[ColumnMapping, ...]:
        return tuple(column for column in self.columns if column.has_default_constraint)

    @property
    def key_properties(self) -> tuple[PropertyDescriptor, ...]:
        """Top-level properties holding the key columns, in declaration order."""
        properties: dict[str, PropertyDescriptor] = {}
        for column in self.key_columns:
            head = column.source_path[0]
            properties.setdefault(head.name, head)
        return tuple(properties.values())


def _matches(names: tuple[str, ...], declared: Iterable[tuple[str, ...]]) -> bool:
    """True if one of the declared paths is names itself or one of its ancestors."""
    return any(names[:len(path)] == path for path in declared)


class TableAggregateConfiguration:
    """Fluent builder describing how an aggregate type maps to a table."""

    def __init__(self, aggregate_type: type, table_name: Optional[str] = None,
                 schema: Optional[str] = None,
                 properties_cache: Optional[TypePropertiesCache] = None):
        self.aggregate_type = aggregate_type
        self.table_name = table_name
        self.schema = schema
        self.dialect: Optional[str] = None
        self._properties_cache = properties_cache or default_properties_cache
        self._keys: list[str] = []
        self._identities: list[str] = []
        self._defaults: list[str] = []
        self._ignored: list[str] = []
        self._value_object_types: list[type] = []

    @property
    def entity_name(self) -> Optional[str]:
        return self.table_name

    @entity_name.setter
    def entity_name(self, value: Optional[str]) -> None:
        self.table_name = value

    # declarations

    def has_key(self, *paths: str) -> "TableAggregateConfiguration":
        """Declare the key; several paths make a composite key."""
        self._keys.extend(paths)
        return self

    def has_identity(self, *paths: str) -> "TableAggregateConfiguration":
        """Declare columns whose value is generated by the database on insert."""
        self._identities.extend(paths)
        return self

    def has_default(self, *paths: str) -> "TableAggregateConfiguration":
        """Declare columns the database fills in when no value is supplied."""
        self._defaults.extend(paths)
        return self

    def ignore(self, *paths: str) -> "TableAggregateConfiguration":
        """Exclude properties (and everything below them) from the mapping."""
        self._ignored.extend(paths)
        return self

    def has_value_object(self, *types: type) -> "TableAggregateConfiguration":
        """Flatten properties of these plain classes into columns."""
        for value_object_type in types:
            if value_object_type not in self._value_object_types:
                self._value_object_types.append(value_object_type)
        return self

    def set_defaults(self, defaults: DefaultConfiguration) -> "TableAggregateConfiguration":
        """Fill unset schema and dialect from defaults and register its value objects."""
        if self.schema is None:
            self.schema = defaults.default_schema
        if self.dialect is None:
            self.dialect = defaults.dialect
        return self.has_value_object(*defaults.value_object_types)

    # build

    def _is_value_object(self, t: Any) -> bool:
        return is_value_object(t, self._value_object_types)

    def _resolve_path(self, path: str) -> tuple[str, ...]:
        names = tuple(path.split("."))
        owner = self.aggregate_type
        for index, name in enumerate(names):
            if owner is None or name not in self._properties_cache.get_properties(owner):
                raise ConfigurationError(
                    f"`{self.aggregate_type.__name__}` has no property `{path}`",
                    field=path,
                )
            prop = self._properties_cache.get_properties(owner)[name]
            is_last = index == len(names) - 1
            owner = prop.type if not is_last and self._is_value_object(prop.type) else None
        return names

    def _flatten(self, owner: type, prefix: tuple[PropertyDescriptor, ...],
                 visiting: tuple[type, ...], roles: dict[str, list[tuple[str, ...]]]):
        if owner in visiting:
            cycle = " -> ".join(t.__name__ for t in visiting + (owner,))
            raise InvariantViolation(f"Value object cycle detected: {cycle}")
        visiting = visiting + (owner,)
        children = []
        for prop in self._properties_cache.get_properties(owner).values():
            path = prefix + (prop,)
            names = tuple(p.name for p in path)
            if _matches(names, roles["ignored"]):
                continue
            if self._is_value_object(prop.type):
                children.append(ValueObjectNode(
                    qualified_name=qualify(path),
                    source_path=path,
                    value_type=prop.type,
                    children=self._flatten(prop.type, path, visiting, roles),
                ))
                continue
            children.append(ColumnMapping(
                qualified_name=qualify(path),
                source_path=path,
                is_key=_matches(names, roles["keys"]),
                is_identity=_matches(names, roles["identities"]),
                has_default_constraint=_matches(names, roles["defaults"]),
                is_included_in_update=all(p.has_setter for p in path),
            ))
        return tuple(children)

    def build(self) -> AggregateConfiguration:
        """Flatten the aggregate into its columns."""
        roles = {
            "keys": [self._resolve_path(path) for path in self._keys],
            "identities": [self._resolve_path(path) for path in self._identities],
            "defaults": [self._resolve_path(path) for path in self._defaults],
            "ignored": [self._resolve_path(path) for path in self._ignored],
        }
        root = ValueObjectNode(
            qualified_name="",
            source_path=(),
            value_type=self.aggregate_type,
            children=self._flatten(self.aggregate_type, (), (), roles),
        )
        columns = tuple(root.iter_columns())
        seen: set[str] = set()
        for column in columns:
            if column.qualified_name in seen:
                raise InvariantViolation(
                    f"Duplicate column `{column.qualified_name}` in "
                    f"`{self.aggregate_type.__name__}`"
                )
            seen.add(column.qualified_name)
        logger.debug("Flattened %s into %d columns", self.aggregate_type.__name__, len(columns))
        return AggregateConfiguration(
            aggregate_type=self.aggregate_type,
            entity_name=self.table_name,
            schema_name=self.schema,
            dialect=self.dialect,
            root=root,
            columns=columns,
        )
