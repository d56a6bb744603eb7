# src/cs_market/domain/repository.py
"""Repository and clock Protocols — dependency inversion for testability.

Unit tests inject fakes that conform to these Protocols.
Infrastructure layer provides the real implementations.
"""

from collections.abc import Sequence
from typing import Protocol

from src.cs_market.domain.models import Market


class MarketRepositoryProtocol(Protocol):
    def load(self) -> list[Market] | None: ...

    def save(self, markets: Sequence[Market]) -> bool: ...


class ClockProtocol(Protocol):
    def now_ms(self) -> int: ...
