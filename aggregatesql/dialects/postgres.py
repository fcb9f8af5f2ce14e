"""PostgreSQL dialect."""

from typing import ClassVar, Sequence

from ..column import ColumnMapping
from .base import Dialect


class PostgresDialect(Dialect):
    """Dialect for PostgreSQL (scheme postgresql): schemas, ON CONFLICT DO UPDATE."""

    NAME: ClassVar[str] = "PostgreSQL"
    SUPPORTED_SCHEMES: ClassVar[tuple[str, ...]] = ("postgresql", "postgres")

    def last_inserted_id(self) -> str:
        return "lastval()"

    def upsert(self, table_reference: str, table_name: str,
               insert_columns: Sequence[ColumnMapping],
               key_columns: Sequence[ColumnMapping],
               update_columns: Sequence[ColumnMapping]) -> str:
        return self._on_conflict_upsert(table_reference, insert_columns, key_columns, update_columns)
