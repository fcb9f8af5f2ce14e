"""MySQL dialect."""

from typing import ClassVar, Sequence

from ..column import ColumnMapping
from .base import Dialect, assignments, column_names, parameter_names


class MysqlDialect(Dialect):
    """Dialect for MySQL / MariaDB (scheme mysql): no schemas, ON DUPLICATE KEY UPDATE."""

    NAME: ClassVar[str] = "MySQL"
    SUPPORTED_SCHEMES: ClassVar[tuple[str, ...]] = ("mysql", "mariadb")
    SUPPORTS_SCHEMA: ClassVar[bool] = False

    def last_inserted_id(self) -> str:
        return "LAST_INSERT_ID()"

    def empty_insert(self, table_reference: str) -> str:
        return f"INSERT INTO {table_reference} () VALUES ();"

    def upsert(self, table_reference: str, table_name: str,
               insert_columns: Sequence[ColumnMapping],
               key_columns: Sequence[ColumnMapping],
               update_columns: Sequence[ColumnMapping]) -> str:
        return (
            f"INSERT INTO {table_reference} ({column_names(insert_columns)}) "
            f"VALUES ({parameter_names(insert_columns)}) "
            f"ON DUPLICATE KEY UPDATE {assignments(update_columns)};"
        )
