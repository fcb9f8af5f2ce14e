"""SQL dialects: one class per engine (MySQL, PostgreSQL, SQL Server, SQLite)."""

from ..exceptions import ConfigurationError
from .base import Dialect
from .mysql import MysqlDialect
from .postgres import PostgresDialect
from .sqlite import SqliteDialect
from .sqlserver import SqlserverDialect

_DIALECT_CLASSES: tuple[type[Dialect], ...] = (
    MysqlDialect,
    PostgresDialect,
    SqlserverDialect,
    SqliteDialect,
)


def get_dialect_for_scheme(scheme: str) -> Dialect:
    """Return a Dialect instance for the given URL scheme (e.g. 'mysql', 'postgresql+psycopg')."""
    normalized = (scheme or "").split("+")[0].lower()
    for dialect_cls in _DIALECT_CLASSES:
        if normalized in dialect_cls.SUPPORTED_SCHEMES:
            return dialect_cls()
    raise ConfigurationError(f"Unsupported database scheme: {scheme}", field="dialect")


__all__ = [
    "Dialect",
    "MysqlDialect",
    "PostgresDialect",
    "SqlserverDialect",
    "SqliteDialect",
    "get_dialect_for_scheme",
]
