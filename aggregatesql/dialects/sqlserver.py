"""SQL Server dialect."""

from typing import ClassVar, Sequence

from ..column import ColumnMapping
from .base import Dialect, column_names


class SqlserverDialect(Dialect):
    """Dialect for SQL Server (schemes mssql, sqlserver): schemas, MERGE without OUTPUT."""

    NAME: ClassVar[str] = "SQL Server"
    SUPPORTED_SCHEMES: ClassVar[tuple[str, ...]] = ("mssql", "sqlserver")

    def last_inserted_id(self) -> str:
        return "SCOPE_IDENTITY()"

    def upsert(self, table_reference: str, table_name: str,
               insert_columns: Sequence[ColumnMapping],
               key_columns: Sequence[ColumnMapping],
               update_columns: Sequence[ColumnMapping]) -> str:
        inserted = {c.qualified_name for c in insert_columns}
        selected = list(insert_columns) + [c for c in update_columns if c.qualified_name not in inserted]
        source = ", ".join(f"{c.parameter} AS {c.qualified_name}" for c in selected)
        on = " AND ".join(
            f"{table_name}.{c.qualified_name} = source.{c.qualified_name}" for c in key_columns
        )
        update = ", ".join(f"{c.qualified_name} = source.{c.qualified_name}" for c in update_columns)
        values = ", ".join(f"source.{c.qualified_name}" for c in insert_columns)
        return (
            f"MERGE INTO {table_reference} USING (SELECT {source}) AS source ON {on} "
            f"WHEN MATCHED THEN UPDATE SET {update} "
            f"WHEN NOT MATCHED THEN INSERT ({column_names(insert_columns)}) VALUES ({values});"
        )
