"""
- Keep the app off the network (local random source)
- Give every test a fresh, empty RoundStore and override FastAPI's get_store
- Provide a client fixture (TestClient(app)) that already has the override applied
"""
import os
import pytest

from fastapi.testclient import TestClient

# Ensure the app never calls random.org during tests
os.environ.setdefault("APP_ENV", "test")
os.environ["RANDOM_SOURCE"] = "local"

from number_quest.main import app, get_store
from number_quest.store import RoundStore


class FixedRandom:
    """
    Fake rng: hands out the given numbers in order, one per randint() call.
    initialize_round() asks for target first, then start.
    """
    def __init__(self, *values: int) -> None:
        self.values = list(values)
        self.calls = []

    def randint(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        return self.values.pop(0)


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def store() -> RoundStore:
    return RoundStore()


@pytest.fixture(autouse=True)
def override_dep(store):
    """Force the app to use our per-test store for every request."""
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)
