"""MarketStore — owned state container for the market collection.

Exactly four mutation entry points: create_market, cast_vote, delete_market,
resolve_market. Each builds a new tuple snapshot, persists the whole
collection, then notifies subscribers. Snapshots are never mutated after
being handed out.

Persistence is best-effort: a failed write leaves in-memory state
authoritative for the rest of the session.
"""

import dataclasses
import logging
from collections.abc import Callable

from src.cs_common.enums import Ballot
from src.cs_common.errors import EmptyQuestionError
from src.cs_common.id_generator import generate_market_id
from src.cs_market.domain.models import Market
from src.cs_market.domain.repository import ClockProtocol, MarketRepositoryProtocol
from src.cs_market.domain.rules import apply_vote, compute_expires_at, is_locked, is_valid_ballot
from src.cs_market.domain.seed import default_markets

logger = logging.getLogger("cs.store")

Listener = Callable[[tuple[Market, ...]], None]

DEFAULT_CATEGORY = "General"
_MAX_ID_ATTEMPTS = 16


class MarketStore:
    def __init__(
        self,
        repo: MarketRepositoryProtocol,
        clock: ClockProtocol,
        default_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self._repo = repo
        self._clock = clock
        self._default_category = default_category
        self._markets: tuple[Market, ...] = ()
        self._listeners: list[Listener] = []

    @property
    def markets(self) -> tuple[Market, ...]:
        return self._markets

    def get(self, market_id: str) -> Market | None:
        return next((m for m in self._markets if m.id == market_id), None)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> tuple[Market, ...]:
        """Load persisted markets, falling back to the seed collection."""
        stored = self._repo.load()
        if stored is None:
            logger.info("Starting from seed markets")
            self._markets = tuple(default_markets(self._clock.now_ms()))
        else:
            self._markets = tuple(stored)
            logger.info("Loaded %d markets from storage", len(self._markets))
        return self._markets

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register an on-change callback; returns the unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_market(
        self,
        question: str,
        category: str = "",
        expiry_days: object = None,
    ) -> Market:
        """Prepend a new market.

        The question must be non-empty after trimming; callers validate
        first. A blank question reaching the store raises EmptyQuestionError
        rather than creating an unnamed market.
        """
        question = (question or "").strip()
        if not question:
            raise EmptyQuestionError()

        now = self._clock.now_ms()
        market = Market(
            id=self._new_id(now),
            question=question,
            category=(category or "").strip() or self._default_category,
            created_at=now,
            expires_at=compute_expires_at(now, expiry_days),
        )
        self._commit((market, *self._markets))
        logger.info("Created market %s (%s)", market.id, market.category)
        return market

    def cast_vote(self, market_id: str, user_id: str, ballot: str) -> Market | None:
        """Toggle `user_id`'s ballot on the market.

        No-op (returns None) for unknown ids, locked markets, or ballots other
        than "yes"/"no".
        """
        if not is_valid_ballot(ballot):
            logger.debug("Ignoring invalid ballot %r on %s", ballot, market_id)
            return None
        market = self.get(market_id)
        if market is None:
            logger.debug("Ignoring vote on unknown market %s", market_id)
            return None
        if is_locked(market, self._clock.now_ms()):
            logger.debug("Ignoring vote on locked market %s", market_id)
            return None

        ballot = Ballot(ballot).value
        updated = dataclasses.replace(market, votes=apply_vote(market.votes, user_id, ballot))
        self._commit(tuple(updated if m.id == market_id else m for m in self._markets))
        return updated

    def delete_market(self, market_id: str) -> bool:
        remaining = tuple(m for m in self._markets if m.id != market_id)
        if len(remaining) == len(self._markets):
            logger.debug("Ignoring delete of unknown market %s", market_id)
            return False
        self._commit(remaining)
        logger.info("Deleted market %s", market_id)
        return True

    def resolve_market(self, market_id: str, outcome: str) -> Market | None:
        """Set the outcome, overwriting any previous one.

        No eligibility check: unexpired, vote-less and already-resolved
        markets are all accepted.
        """
        if not is_valid_ballot(outcome):
            logger.debug("Ignoring invalid outcome %r on %s", outcome, market_id)
            return None
        market = self.get(market_id)
        if market is None:
            logger.debug("Ignoring resolve of unknown market %s", market_id)
            return None
        if market.resolved is not None and market.resolved != outcome:
            logger.warning(
                "Market %s re-resolved from %s to %s", market_id, market.resolved, outcome
            )

        updated = dataclasses.replace(market, resolved=Ballot(outcome).value)
        self._commit(tuple(updated if m.id == market_id else m for m in self._markets))
        logger.info("Resolved market %s as %s", market_id, outcome)
        return updated

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_id(self, now_ms: int) -> str:
        existing = {m.id for m in self._markets}
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = generate_market_id(now_ms)
            if candidate not in existing:
                return candidate
        raise RuntimeError(f"Could not generate a unique market id at {now_ms}")

    def _commit(self, markets: tuple[Market, ...]) -> None:
        self._markets = markets
        self._repo.save(markets)
        for listener in list(self._listeners):
            try:
                listener(markets)
            except Exception:
                logger.exception("Market store listener %r failed", listener)
