"""Shared fixtures: deterministic random sources."""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from namechain import settings


class MinRandom:
    """Always draws the lowest value."""

    def random_int(self, low, high):
        return low

    def random_index(self, n):
        return 0


class MaxRandom:
    """Always draws the highest value."""

    def random_int(self, low, high):
        return high

    def random_index(self, n):
        return n - 1


class ScriptedRandom:
    """Replays prescribed draws; random_index draws come from their own list."""

    def __init__(self, ints, indexes=()):
        self.ints = list(ints)
        self.indexes = list(indexes)
        self.calls = []

    def random_int(self, low, high):
        value = self.ints.pop(0)
        self.calls.append(('int', low, high, value))
        assert low <= value <= high, f"scripted draw {value} outside [{low}, {high}]"
        return value

    def random_index(self, n):
        value = self.indexes.pop(0)
        self.calls.append(('index', n, value))
        assert 0 <= value < n
        return value


@pytest.fixture
def min_rng():
    return MinRandom()


@pytest.fixture
def max_rng():
    return MaxRandom()


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Every test starts from the bundled app.yaml."""
    monkeypatch.delenv(settings.CONFIG_ENV_VAR, raising=False)
    settings.clear_cache()
    yield
    settings.clear_cache()
