"""MarketRepository — concrete implementation of MarketRepositoryProtocol.

Whole-collection persistence: every save rewrites the full payload under one
key. Reads and writes are best-effort; failures are logged, never raised.
"""

import json
import logging
from collections.abc import Sequence

from src.cs_common.errors import StorageError
from src.cs_common.kv_store import KeyValueStore
from src.cs_market.domain.models import Market
from src.cs_market.infrastructure.records import MarketRecord, MarketRecordList

logger = logging.getLogger("cs.persistence")


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def serialize_markets(markets: Sequence[Market]) -> str:
    """Compact JSON array, field order fixed by MarketRecord."""
    payload = [MarketRecord.from_domain(m).model_dump(by_alias=True) for m in markets]
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def deserialize_markets(raw: str) -> list[Market]:
    """Parse a payload produced by serialize_markets.

    Raises ValueError (pydantic ValidationError included) when the payload is
    not JSON, not a list, or any element does not match MarketRecord.
    """
    records = MarketRecordList.validate_json(raw)
    markets: list[Market] = []
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            logger.warning("Dropping duplicate market id %s from stored payload", record.id)
            continue
        seen.add(record.id)
        markets.append(record.to_domain())
    return markets


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class MarketRepository:
    def __init__(self, kv: KeyValueStore, key: str) -> None:
        self._kv = kv
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Market] | None:
        """Stored markets, or None when absent/unreadable/malformed."""
        try:
            raw = self._kv.get(self._key)
        except Exception:
            logger.warning("Market storage read failed for key %s", self._key, exc_info=True)
            return None
        if not raw:
            logger.debug("No stored markets under key %s", self._key)
            return None
        try:
            return deserialize_markets(raw)
        except ValueError as exc:
            logger.warning("Ignoring malformed market payload under key %s: %s", self._key, exc)
            return None

    def save(self, markets: Sequence[Market]) -> bool:
        """Write the full collection; False when the backend rejected it."""
        payload = serialize_markets(markets)
        try:
            self._kv.set(self._key, payload)
        except StorageError as exc:
            logger.warning("Market storage write failed: %s", exc.message)
            return False
        except Exception:
            logger.warning("Market storage write failed for key %s", self._key, exc_info=True)
            return False
        return True
