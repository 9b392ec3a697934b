# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides sample records, a controllable clock for TTL tests, and an
optimizer isolated from any .env file.
"""

from __future__ import annotations

import json

import pytest

from tokenslim.api.facade import TokenOptimizer
from tokenslim.config.settings import Settings


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_records() -> list[dict]:
    """Three uniform user records, keys ordered id, name, role."""
    return [
        {"id": 1, "name": "Alice", "role": "admin"},
        {"id": 2, "name": "Bob", "role": "user"},
        {"id": 3, "name": "Carol", "role": "user"},
    ]


@pytest.fixture
def sample_records_json(sample_records: list[dict]) -> str:
    return json.dumps(sample_records)


@pytest.fixture
def toon_table() -> str:
    return "[3]{id,name,role}:\n1,Alice,admin\n2,Bob,user\n3,Carol,user"


@pytest.fixture
def zon_table() -> str:
    return "@data(3):id,name,role\n1,Alice,admin\n2,Bob,user\n3,Carol,user"


# === FIXTURES: Services ===


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def optimizer(settings: Settings) -> TokenOptimizer:
    return TokenOptimizer(settings=settings)
