"""Tests for aggregatesql.dialects.base: Dialect and the list helpers."""

import pytest

from aggregatesql import TableAggregateConfiguration
from aggregatesql.dialects.base import Dialect, assignments, column_names, parameter_names
from tests.aggregates import SinglePrimaryKeyAggregate


def _columns():
    mapping = TableAggregateConfiguration(SinglePrimaryKeyAggregate, table_name="users").has_key("id").build()
    return mapping.columns


class _Dialect(Dialect):
    NAME = "Test"
    SUPPORTED_SCHEMES = ("test",)

    def last_inserted_id(self):
        return "LAST()"

    def upsert(self, table_reference, table_name, insert_columns, key_columns, update_columns):
        return "UPSERT;"


def test_dialect_is_abstract():
    with pytest.raises(TypeError):
        Dialect()


def test_dialect_defaults():
    d = _Dialect()
    assert d.name == "Test"
    assert d.supports_schema
    assert d.empty_insert("t") == "INSERT INTO t DEFAULT VALUES;"


def test_dialect_insert():
    d = _Dialect()
    columns = _columns()[1:]
    assert d.insert("t", columns) == "INSERT INTO t (username, password) VALUES (@username, @password);"
    assert d.insert("s.t", ()) == "INSERT INTO s.t DEFAULT VALUES;"


def test_dialect_is_frozen():
    d = _Dialect()
    with pytest.raises(Exception):
        d.extra = 1


def test_list_helpers():
    columns = _columns()
    assert column_names(columns) == "id, username, password"
    assert parameter_names(columns) == "@id, @username, @password"
    assert assignments(columns[1:]) == "username = @username, password = @password"
