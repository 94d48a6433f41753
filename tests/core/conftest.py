"""Fixtures for core store tests."""

from __future__ import annotations

import pytest

from storydeck.db import TrackerDB
from tests._db_factory import MemoryDatabase


@pytest.fixture
def memory_backend() -> MemoryDatabase:
    return MemoryDatabase()


@pytest.fixture
def memory_db(memory_backend: MemoryDatabase) -> TrackerDB:
    """TrackerDB over an in-memory backend, for write-count assertions."""
    return TrackerDB(memory_backend)
