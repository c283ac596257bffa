"""Pytest configuration and fixtures for query tests."""

import pytest
from dotenv import load_dotenv

from crossquery.settings import settings

from .entities import Child, Entity

# Load environment variables
load_dotenv()


@pytest.fixture
def entity():
    """Entity with every field populated."""
    return Entity(
        a="abc",
        b="def",
        c=123,
        d=Child(e="ghi", f=True, g=456, labels=["x", "y"]),
        tags=["red", "green"],
        scores=[1, 2, 3, 4, 5],
        attributes={"height": 180, "weight": 75},
    )


@pytest.fixture
def bare_entity():
    """Entity with only the required field."""
    return Entity(a="")


@pytest.fixture
def numbers():
    return [1, 2, 3, 4, 5]


@pytest.fixture
def empty_numbers():
    return []


@pytest.fixture
def lenient_types(monkeypatch):
    """Disable construction-time type and capability checks."""
    monkeypatch.setattr(settings, "QUERY_STRICT_TYPES", False)


@pytest.fixture
def no_compile_cache(monkeypatch):
    monkeypatch.setattr(settings, "QUERY_CACHE_COMPILED", False)
