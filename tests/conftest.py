"""Shared fixtures for TreeGrid tests."""

import pytest

from treegrid.treegrid_server.api.service import TableService
from treegrid.treegrid_server.store import DataStore


@pytest.fixture
def store():
    """Fresh store populated with the seed tables."""
    return DataStore.from_seed()


@pytest.fixture
def service(store):
    """TableService over the seeded store."""
    return TableService(store)
