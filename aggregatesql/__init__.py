"""aggregatesql: dialect-correct CRUD and upsert SQL for aggregates, from declarative configuration."""

from .configuration import AggregateConfiguration, DefaultConfiguration, TableAggregateConfiguration
from .column import ColumnMapping, ValueObjectNode
from .dialects import get_dialect_for_scheme
from .exceptions import (
    AggregateSqlError,
    ConfigurationError,
    InvariantViolation,
    UnsupportedShapeError,
)
from .query_generator import QueryGenerator
from .reflection import PropertyDescriptor, TypePropertiesCache, default_properties_cache
