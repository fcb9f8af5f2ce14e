"""Exceptions raised while building configurations and generating queries.

Every error is raised synchronously, before any SQL is returned, and is
deterministic for a given configuration: fix the configuration, do not retry.
"""

from typing import Optional


class AggregateSqlError(Exception):
    """Base class for every error raised by aggregatesql."""


class ConfigurationError(AggregateSqlError, ValueError):
    """Invalid user configuration (table name, schema, keys, property paths, dialect)."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class UnsupportedShapeError(AggregateSqlError):
    """The configuration cannot be expressed by the requested statement."""


class InvariantViolation(AggregateSqlError):
    """Programmer error in the mapped types (duplicate columns, value object cycles)."""
