"""Tests for aggregatesql.dialects: get_dialect_for_scheme and supported schemes."""

import pytest

from aggregatesql import ConfigurationError
from aggregatesql.dialects import (
    get_dialect_for_scheme,
    SqliteDialect,
    MysqlDialect,
    PostgresDialect,
    SqlserverDialect,
)


def test_get_dialect_for_scheme_sqlite():
    d = get_dialect_for_scheme("sqlite")
    assert isinstance(d, SqliteDialect)


def test_get_dialect_for_scheme_normalizes_and_lowercases():
    d = get_dialect_for_scheme("MYSQL")
    assert isinstance(d, MysqlDialect)
    d = get_dialect_for_scheme("postgresql+psycopg2")
    assert isinstance(d, PostgresDialect)


def test_get_dialect_for_scheme_mysql_and_mariadb():
    assert isinstance(get_dialect_for_scheme("mysql"), MysqlDialect)
    assert isinstance(get_dialect_for_scheme("mariadb"), MysqlDialect)


def test_get_dialect_for_scheme_postgresql():
    assert isinstance(get_dialect_for_scheme("postgresql"), PostgresDialect)
    assert isinstance(get_dialect_for_scheme("postgres"), PostgresDialect)


def test_get_dialect_for_scheme_mssql():
    d = get_dialect_for_scheme("mssql")
    assert isinstance(d, SqlserverDialect)


def test_get_dialect_for_scheme_sqlserver():
    d = get_dialect_for_scheme("sqlserver")
    assert isinstance(d, SqlserverDialect)


def test_get_dialect_for_scheme_unsupported_raises():
    with pytest.raises(ConfigurationError, match="Unsupported database scheme"):
        get_dialect_for_scheme("nosuch")
    with pytest.raises(ValueError, match="Unsupported database scheme"):
        get_dialect_for_scheme("oracle")


def test_get_dialect_for_scheme_empty_raises():
    with pytest.raises(ConfigurationError, match="Unsupported database scheme"):
        get_dialect_for_scheme("")


def test_get_dialect_for_scheme_none_raises():
    with pytest.raises(ConfigurationError, match="Unsupported database scheme"):
        get_dialect_for_scheme(None)
