import logging

import pytest

from aggregatesql import TypePropertiesCache


@pytest.fixture(scope="function")
def properties_cache():
    """An isolated property cache, so tests do not share cached types."""
    yield TypePropertiesCache()


@pytest.fixture(scope="function")
def aggregatesql_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="aggregatesql")
    yield caplog
