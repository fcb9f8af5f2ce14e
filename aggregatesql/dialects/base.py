"""Base Dialect type: subclasses describe how one engine spells the statements that differ."""

from abc import ABC, abstractmethod
from typing import ClassVar, Sequence

from pydantic import BaseModel

from ..column import ColumnMapping


def column_names(columns: Sequence[ColumnMapping]) -> str:
    """``a, b, c``"""
    return ", ".join(column.qualified_name for column in columns)


def parameter_names(columns: Sequence[ColumnMapping]) -> str:
    """``@a, @b, @c``"""
    return ", ".join(column.parameter for column in columns)


def assignments(columns: Sequence[ColumnMapping]) -> str:
    """``a = @a, b = @b``"""
    return ", ".join(f"{column.qualified_name} = {column.parameter}" for column in columns)


class Dialect(BaseModel, ABC):
    """Base for SQL dialects; subclasses implement identity retrieval and native upsert."""

    model_config = {"frozen": True}

    NAME: ClassVar[str] = ""
    """Human readable engine name, used in error messages."""

    SUPPORTED_SCHEMES: ClassVar[tuple[str, ...]] = ()
    """URL schemes this dialect handles (e.g. ('mysql',), ('mssql', 'sqlserver'))."""

    SUPPORTS_SCHEMA: ClassVar[bool] = True
    """Whether tables can be qualified with a schema name."""

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def supports_schema(self) -> bool:
        return self.SUPPORTS_SCHEMA

    @abstractmethod
    def last_inserted_id(self) -> str:
        """SQL expression evaluating to the identity generated by the last INSERT."""
        ...  # pylint: disable=unnecessary-ellipsis

    @abstractmethod
    def upsert(self, table_reference: str, table_name: str,
               insert_columns: Sequence[ColumnMapping],
               key_columns: Sequence[ColumnMapping],
               update_columns: Sequence[ColumnMapping]) -> str:
        """Single statement inserting a row, or updating update_columns when the key exists.

        The statement ends with ``;``. update_columns is never empty.
        """
        ...  # pylint: disable=unnecessary-ellipsis

    def empty_insert(self, table_reference: str) -> str:
        """INSERT statement for a row where every column comes from the database."""
        return f"INSERT INTO {table_reference} DEFAULT VALUES;"

    def insert(self, table_reference: str, insert_columns: Sequence[ColumnMapping]) -> str:
        if not insert_columns:
            return self.empty_insert(table_reference)
        return (
            f"INSERT INTO {table_reference} ({column_names(insert_columns)}) "
            f"VALUES ({parameter_names(insert_columns)});"
        )

    def _on_conflict_upsert(self, table_reference: str,
                            insert_columns: Sequence[ColumnMapping],
                            key_columns: Sequence[ColumnMapping],
                            update_columns: Sequence[ColumnMapping]) -> str:
        return (
            f"INSERT INTO {table_reference} ({column_names(insert_columns)}) "
            f"VALUES ({parameter_names(insert_columns)}) "
            f"ON CONFLICT ({column_names(key_columns)}) "
            f"DO UPDATE SET {assignments(update_columns)};"
        )
