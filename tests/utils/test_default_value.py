"""Tests for aggregatesql.utils.default_value."""

import datetime
import decimal
import enum
import uuid
from dataclasses import dataclass
from typing import Optional

import pytest

from aggregatesql.utils.default_value import get_default_value, is_default_value


class Color(enum.Enum):
    RED = 1


@dataclass
class Point:
    x: int = 0


@pytest.mark.parametrize("annotation, expected", [
    (int, 0),
    (bool, False),
    (float, 0.0),
    (decimal.Decimal, decimal.Decimal(0)),
    (datetime.timedelta, datetime.timedelta(0)),
    (datetime.datetime, datetime.datetime.min),
    (datetime.date, datetime.date.min),
    (datetime.time, datetime.time.min),
    (uuid.UUID, uuid.UUID(int=0)),
])
def test_scalar_zero_values(annotation, expected):
    value = get_default_value(annotation)
    assert value == expected
    assert type(value) is annotation


@pytest.mark.parametrize("annotation", [
    str,
    bytes,
    Optional[int],
    int | None,
    Point,
    Color,
    list[int],
    int | str,
    object,
])
def test_everything_else_defaults_to_none(annotation):
    assert get_default_value(annotation) is None


def test_datetime_is_not_mistaken_for_date():
    assert isinstance(get_default_value(datetime.datetime), datetime.datetime)


def test_empty_string_is_not_a_default():
    default = get_default_value(str)
    assert not is_default_value("", default)
    assert is_default_value(None, default)


def test_is_default_value_uses_equality():
    assert is_default_value(decimal.Decimal("0.00"), get_default_value(decimal.Decimal))
    assert is_default_value(datetime.datetime(1, 1, 1), get_default_value(datetime.datetime))
    assert not is_default_value(1, get_default_value(int))
