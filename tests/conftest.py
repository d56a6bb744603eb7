"""Shared test fixtures."""

import pytest

from src.cs_common.clock import FixedClock
from src.cs_common.kv_store import MemoryKeyValueStore
from src.cs_market.application.store import MarketStore
from src.cs_market.infrastructure.persistence import MarketRepository

NOW_MS = 1_718_000_000_000
MARKETS_KEY = "crowd-signal-markets-v3"


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW_MS)


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def repo(kv: MemoryKeyValueStore) -> MarketRepository:
    return MarketRepository(kv, MARKETS_KEY)


@pytest.fixture
def store(repo: MarketRepository, clock: FixedClock) -> MarketStore:
    """Store initialized from empty storage, i.e. holding only the seed market."""
    s = MarketStore(repo, clock)
    s.initialize()
    return s
