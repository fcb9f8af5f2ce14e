"""SQL generation for one aggregate configuration in one dialect.

The generator validates its configuration once, when constructed, and is
immutable afterwards: every ``generate_*`` method is a pure function of the
configuration and, for insert and upsert, of the aggregate's current values.
Placeholders are named after the flattened columns (``@address_city``) so the
execution layer can bind ``get_parameters(aggregate)`` directly.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .column import ColumnMapping, read_path
from .configuration import AggregateConfiguration, TableAggregateConfiguration
from .dialects import Dialect, get_dialect_for_scheme
from .dialects.base import assignments
from .exceptions import ConfigurationError, UnsupportedShapeError

logger = logging.getLogger("aggregatesql")


class QueryGenerator:
    """Generates get, get-all, insert, update, delete and upsert statements for an aggregate."""

    def __init__(self,
                 configuration: Union[TableAggregateConfiguration, AggregateConfiguration],
                 dialect: Union[Dialect, str, None] = None):
        if isinstance(configuration, TableAggregateConfiguration):
            configuration = configuration.build()
        if dialect is None:
            dialect = configuration.dialect
        if dialect is None:
            raise ConfigurationError(
                f"No dialect configured for `{configuration.aggregate_type.__name__}`",
                field="dialect",
            )
        if isinstance(dialect, str):
            dialect = get_dialect_for_scheme(dialect)
        self._validate(configuration, dialect)

        self._configuration = configuration
        self._dialect = dialect
        self._table: str = configuration.entity_name
        schema = configuration.schema_name
        self._table_reference = f"{schema}.{self._table}" if schema and schema.strip() else self._table
        self._columns = configuration.columns
        self._key_columns = configuration.key_columns
        self._identity_columns = configuration.identity_columns
        self._key_properties = configuration.key_properties
        self._value_object_keys = frozenset(
            column.source_path[0].name for column in self._key_columns if len(column.source_path) > 1
        )
        self._update_columns = tuple(
            column
            for column in self._columns
            if column.is_included_in_update and not column.is_key and not column.is_identity
        )
        self._get_query = self._select(self._key_predicate())
        logger.info(
            "Query generator for %s (%s): %d columns, %d key columns",
            self._table_reference, dialect.name, len(self._columns), len(self._key_columns),
        )

    @staticmethod
    def _validate(configuration: AggregateConfiguration, dialect: Dialect) -> None:
        table_name = configuration.entity_name
        if table_name is None:
            raise ConfigurationError("Table name cannot be None", field="table_name")
        if not table_name.strip():
            raise ConfigurationError(
                "Table name cannot be empty or whitespace", field="table_name"
            )
        if not dialect.supports_schema and configuration.schema_name not in (None, ""):
            raise ConfigurationError(f"{dialect.name} doesn't support schema", field="schema")
        if not configuration.key_columns:
            raise ConfigurationError(f"Table `{table_name}` has no key columns", field="keys")

    @property
    def configuration(self) -> AggregateConfiguration:
        return self._configuration

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    # fragments

    def _key_predicate(self, substitutions: Optional[Mapping[str, str]] = None) -> str:
        substitutions = substitutions or {}
        return " AND ".join(
            f"{self._table}.{column.qualified_name} = "
            f"{substitutions.get(column.qualified_name, column.parameter)}"
            for column in self._key_columns
        )

    def _select(self, predicate: Optional[str] = None) -> str:
        projection = ", ".join(f"{self._table}.{column.qualified_name}" for column in self._columns)
        sql = f"SELECT {projection} FROM {self._table_reference}"
        if predicate:
            sql += f" WHERE {predicate}"
        return sql + ";"

    def _omits_default(self, column: ColumnMapping, aggregate: Any) -> bool:
        """Unset default-constrained columns are left to the database."""
        return column.has_default_constraint and column.has_default_value(aggregate)

    # statements

    def generate_get_query(self) -> str:
        return self._get_query

    def generate_get_all_query(self) -> str:
        return self._select()

    def generate_delete_query(self) -> str:
        """Select the row about to be deleted, then delete it."""
        return f"{self._get_query}DELETE FROM {self._table_reference} WHERE {self._key_predicate()};"

    def generate_insert_query(self, aggregate: Any) -> str:
        """Insert aggregate, then select it back by key.

        Identity columns are never inserted; a key that is the identity column is
        looked up with the dialect's last-inserted-id expression.
        """
        if len(self._identity_columns) > 1:
            raise UnsupportedShapeError(
                "Cannot generate INSERT query for table with multiple identity properties"
            )
        columns = [
            column
            for column in self._columns
            if not column.is_identity and not self._omits_default(column, aggregate)
        ]
        last_id = {
            column.qualified_name: self._dialect.last_inserted_id()
            for column in self._identity_columns
            if column.is_key
        }
        insert = self._dialect.insert(self._table_reference, columns)
        return insert + self._select(self._key_predicate(last_id))

    def generate_update_query(self, aggregate: Any = None) -> str:
        """Update every settable non-key column, then select the row back.

        The statement does not depend on aggregate's values.
        """
        if not self._update_columns:
            raise UnsupportedShapeError(
                f"Cannot generate UPDATE query for table `{self._table}`: no updatable columns"
            )
        return (
            f"UPDATE {self._table_reference} SET {assignments(self._update_columns)} "
            f"WHERE {self._key_predicate()};{self._get_query}"
        )

    def generate_upsert_query(self, aggregate: Any) -> str:
        """Insert or update aggregate.

        With an identity column, a default-valued identity means a new row (insert)
        and any other value an existing one (update). Without one, the dialect's
        native upsert keyed on the key columns is used, unless there is nothing to
        update, in which case this is a plain insert.
        """
        if self._identity_columns:
            if all(column.has_default_value(aggregate) for column in self._identity_columns):
                return self.generate_insert_query(aggregate)
            return self.generate_update_query(aggregate)
        if not self._update_columns:
            return self.generate_insert_query(aggregate)
        insert_columns = [
            column
            for column in self._columns
            if column.is_key or not self._omits_default(column, aggregate)
        ]
        upsert = self._dialect.upsert(
            self._table_reference,
            self._table,
            insert_columns,
            self._key_columns,
            self._update_columns,
        )
        return upsert + self._get_query

    # parameters

    def get_parameters(self, aggregate: Any) -> dict[str, Any]:
        """Value of every column on aggregate, by placeholder name, in column order."""
        return {column.qualified_name: column.get_value(aggregate) for column in self._columns}

    def get_key_parameters(self, key: Any) -> dict[str, Any]:
        """Key placeholders for get and delete.

        key is the value of the single key property (a scalar or a value object), a
        mapping by key property name, or a sequence in key property order.
        """
        names = [prop.name for prop in self._key_properties]
        if isinstance(key, Mapping):
            missing = [name for name in names if name not in key]
            if missing:
                raise ConfigurationError(f"Missing key values: {', '.join(missing)}", field="key")
            values = {name: key[name] for name in names}
        elif len(names) == 1:
            values = {names[0]: key}
        elif isinstance(key, Sequence) and not isinstance(key, str) and len(key) == len(names):
            values = dict(zip(names, key))
        else:
            raise ConfigurationError(
                f"Expected {len(names)} key values ({', '.join(names)}), got {key!r}",
                field="key",
            )
        for prop in self._key_properties:
            value = values[prop.name]
            if prop.name in self._value_object_keys and not isinstance(value, prop.type):
                raise ConfigurationError(
                    f"Expected a {prop.type.__name__} for key `{prop.name}`, got {value!r}",
                    field="key",
                )
        return {
            column.qualified_name: read_path(column.source_path[1:], values[column.source_path[0].name])
            for column in self._key_columns
        }
