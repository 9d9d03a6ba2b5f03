"""
Pytest fixtures for testing code that registers environment variables.

Enable with ``pytest_plugins = ["envaridator.pytest_plugin"]`` in a
conftest.py. The fixtures keep the process environment untouched.
"""

import pytest

from .lookup import mapping_lookup
from .registry import Envaridator


@pytest.fixture
def env_values():
    """Mutable mapping standing in for the process environment."""
    return {}


@pytest.fixture
def env_lookup(env_values):
    return mapping_lookup(env_values)


@pytest.fixture
def envaridator(env_lookup):
    """A fresh registry reading from env_values."""
    return Envaridator(lookup=env_lookup)
