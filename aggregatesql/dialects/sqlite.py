"""SQLite dialect."""

from typing import ClassVar, Sequence

from ..column import ColumnMapping
from .base import Dialect


class SqliteDialect(Dialect):
    """Dialect for SQLite (scheme sqlite): no schemas, ON CONFLICT DO UPDATE."""

    NAME: ClassVar[str] = "SQLite"
    SUPPORTED_SCHEMES: ClassVar[tuple[str, ...]] = ("sqlite",)
    SUPPORTS_SCHEMA: ClassVar[bool] = False

    def last_inserted_id(self) -> str:
        return "last_insert_rowid()"

    def upsert(self, table_reference: str, table_name: str,
               insert_columns: Sequence[ColumnMapping],
               key_columns: Sequence[ColumnMapping],
               update_columns: Sequence[ColumnMapping]) -> str:
        return self._on_conflict_upsert(table_reference, insert_columns, key_columns, update_columns)
