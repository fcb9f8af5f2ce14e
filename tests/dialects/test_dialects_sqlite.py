"""Tests for aggregatesql.dialects.sqlite: capabilities, identity, upsert."""

from aggregatesql import TableAggregateConfiguration
from aggregatesql.dialects import SqliteDialect
from tests.aggregates import SinglePrimaryKeyAggregate


def test_sqlite_capabilities():
    d = SqliteDialect()
    assert d.name == "SQLite"
    assert not d.supports_schema
    assert d.last_inserted_id() == "last_insert_rowid()"


def test_sqlite_upsert():
    mapping = TableAggregateConfiguration(SinglePrimaryKeyAggregate, table_name="users").has_key("id").build()
    sql = SqliteDialect().upsert("users", "users", mapping.columns, mapping.key_columns, mapping.columns[1:])
    assert sql == (
        "INSERT INTO users (id, username, password) VALUES (@id, @username, @password) "
        "ON CONFLICT (id) DO UPDATE SET username = @username, password = @password;"
    )
