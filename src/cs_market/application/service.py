"""MarketApplicationService — the caller layer in front of MarketStore.

Owns the rules the store deliberately does not enforce: trimming/defaulting
create input, the typed delete confirmation, and per-user read views.
All writes go through the store's four mutation entry points.
"""

from pydantic import ValidationError

from config.settings import Settings
from src.cs_common.errors import DeleteNotConfirmedError, InvalidMarketInputError
from src.cs_market.application.schemas import (
    ALL_CATEGORIES,
    CreateMarketRequest,
    MarketListResponse,
    MarketView,
)
from src.cs_market.application.store import MarketStore
from src.cs_market.domain.models import Market
from src.cs_market.domain.repository import ClockProtocol
from src.cs_market.domain.rules import get_total_votes


class MarketApplicationService:
    def __init__(
        self,
        store: MarketStore,
        user_id: str,
        clock: ClockProtocol,
        cfg: Settings | None = None,
    ) -> None:
        self._store = store
        self._user_id = user_id
        self._clock = clock
        self._cfg = cfg or Settings()

    @property
    def user_id(self) -> str:
        return self._user_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def categories(self) -> list[str]:
        seen = dict.fromkeys(m.category for m in self._store.markets)
        return [ALL_CATEGORIES, *seen]

    def list_markets(self, category: str = ALL_CATEGORIES) -> MarketListResponse:
        markets = self._store.markets
        now = self._clock.now_ms()
        # category=All -> no filter
        filtered = (
            markets if category == ALL_CATEGORIES
            else [m for m in markets if m.category == category]
        )
        return MarketListResponse(
            items=[MarketView.from_domain(m, self._user_id, now) for m in filtered],
            categories=self.categories(),
            total_votes=sum(get_total_votes(m.votes) for m in markets),
        )

    def get_market(self, market_id: str) -> MarketView | None:
        market = self._store.get(market_id)
        if market is None:
            return None
        return MarketView.from_domain(market, self._user_id, self._clock.now_ms())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_market(
        self,
        question: str,
        category: str | None = "",
        expiry_days: object = "",
    ) -> Market:
        try:
            req = CreateMarketRequest.model_validate(
                {
                    "question": question,
                    "category": category or "",
                    "expiry_days": expiry_days,
                },
                context={
                    "question_max_length": self._cfg.QUESTION_MAX_LENGTH,
                    "category_max_length": self._cfg.CATEGORY_MAX_LENGTH,
                    "default_category": self._cfg.DEFAULT_CATEGORY,
                },
            )
        except ValidationError as exc:
            detail = "; ".join(err["msg"] for err in exc.errors())
            raise InvalidMarketInputError(detail) from exc
        return self._store.create_market(req.question, req.category, req.expiry_days)

    def vote(self, market_id: str, ballot: str) -> Market | None:
        return self._store.cast_vote(market_id, self._user_id, ballot)

    def delete_market(self, market_id: str, confirmation: str) -> bool:
        expected = self._cfg.DELETE_CONFIRM_TEXT
        if (confirmation or "").strip().lower() != expected.lower():
            raise DeleteNotConfirmedError(expected)
        return self._store.delete_market(market_id)

    def resolve_market(self, market_id: str, outcome: str) -> Market | None:
        return self._store.resolve_market(market_id, outcome)
