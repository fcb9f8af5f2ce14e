"""Shared test helpers."""

from aggregatesql import QueryGenerator, TableAggregateConfiguration
from tests.aggregates import (
    AggregateWithNestedValueObject,
    AggregateWithValueObjectId,
    CompositePrimaryKeyAggregate,
    HasDefaultConstraintAggregate,
    SinglePrimaryKeyAggregate,
    UserAggregate,
)


def single_primary_key_generator(dialect: str, schema: str = None) -> QueryGenerator:
    config = TableAggregateConfiguration(SinglePrimaryKeyAggregate, table_name="users", schema=schema)
    config.has_key("id").has_identity("id")
    return QueryGenerator(config, dialect)


def composite_primary_key_generator(dialect: str, schema: str = None) -> QueryGenerator:
    config = TableAggregateConfiguration(CompositePrimaryKeyAggregate, table_name="users", schema=schema)
    config.has_key("username", "password")
    return QueryGenerator(config, dialect)


def user_aggregate_generator(dialect: str, schema: str = None) -> QueryGenerator:
    config = TableAggregateConfiguration(UserAggregate, table_name="users", schema=schema)
    config.has_key("id")
    return QueryGenerator(config, dialect)


def value_object_id_generator(dialect: str, schema: str = None) -> QueryGenerator:
    config = TableAggregateConfiguration(AggregateWithValueObjectId, table_name="users", schema=schema)
    config.has_key("id")
    return QueryGenerator(config, dialect)


def nested_value_object_generator(dialect: str, schema: str = None) -> QueryGenerator:
    config = TableAggregateConfiguration(AggregateWithNestedValueObject, table_name="users", schema=schema)
    config.has_key("id")
    return QueryGenerator(config, dialect)


def default_constraint_generator(dialect: str, schema: str = None) -> QueryGenerator:
    config = TableAggregateConfiguration(HasDefaultConstraintAggregate, table_name="users", schema=schema)
    config.has_key("id").has_default("date_created")
    return QueryGenerator(config, dialect)
