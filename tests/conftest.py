"""Shared fixtures: every test runs with default config and its own collector."""

import pytest

from softassert.config import create_default_config
from softassert.context import collector_scope, set_active_config


@pytest.fixture(autouse=True)
def default_config():
    """Use default configuration instead of searching for .softassert.json."""
    config = create_default_config()
    set_active_config(config)
    yield config
    set_active_config(None)


@pytest.fixture(autouse=True)
def collector(default_config):
    """Bind a fresh collector to the test's context."""
    with collector_scope() as bound:
        yield bound
