# tests/unit/test_market_service.py
"""Unit tests for MarketApplicationService (caller layer over a real store)."""
from unittest.mock import MagicMock

import pytest

from config.settings import Settings
from src.cs_common.clock import MS_PER_DAY, FixedClock
from src.cs_common.errors import DeleteNotConfirmedError, InvalidMarketInputError
from src.cs_common.kv_store import MemoryKeyValueStore
from src.cs_market.application.service import MarketApplicationService
from src.cs_market.application.store import MarketStore
from src.cs_market.domain.seed import SEED_MARKET_ID
from src.cs_market.infrastructure.persistence import MarketRepository

NOW = 1_718_000_000_000
KEY = "crowd-signal-markets-v3"


@pytest.fixture
def cfg():
    return Settings(STORAGE_BACKEND="memory")


@pytest.fixture
def svc(store, clock, cfg):
    return MarketApplicationService(store, "u1", clock, cfg)


class TestCreateMarket:
    def test_creates_trimmed(self, svc, store):
        m = svc.create_market("  Will BTC hit 100k?  ", " Crypto ", "7")
        assert m.question == "Will BTC hit 100k?"
        assert m.category == "Crypto"
        assert m.expires_at == NOW + 7 * MS_PER_DAY
        assert store.markets[0] is m

    def test_defaults(self, svc):
        m = svc.create_market("Q?")
        assert m.category == "General"
        assert m.expires_at is None

    def test_none_category_defaults(self, svc):
        assert svc.create_market("Q?", None).category == "General"

    @pytest.mark.parametrize("question", ["", "   ", None])
    def test_blank_question_rejected_before_store(self, clock, cfg, question):
        store = MagicMock()
        svc = MarketApplicationService(store, "u1", clock, cfg)
        with pytest.raises(InvalidMarketInputError):
            svc.create_market(question)
        store.create_market.assert_not_called()

    def test_too_long_question_rejected(self, svc):
        with pytest.raises(InvalidMarketInputError, match="200"):
            svc.create_market("x" * 201)

    def test_settings_limits_applied(self, store, clock):
        cfg = Settings(STORAGE_BACKEND="memory", CATEGORY_MAX_LENGTH=3, DEFAULT_CATEGORY="Misc")
        svc = MarketApplicationService(store, "u1", clock, cfg)
        assert svc.create_market("Q?").category == "Misc"
        with pytest.raises(InvalidMarketInputError):
            svc.create_market("Q?", "Sports")


class TestVote:
    def test_votes_as_session_user(self, svc, store):
        svc.vote(SEED_MARKET_ID, "yes")
        assert store.get(SEED_MARKET_ID).votes == {"u1": "yes"}

    def test_toggle(self, svc, store):
        svc.vote(SEED_MARKET_ID, "yes")
        svc.vote(SEED_MARKET_ID, "yes")
        assert store.get(SEED_MARKET_ID).votes == {}


class TestDeleteMarket:
    @pytest.mark.parametrize("confirmation", ["delete", "  DELETE ", "Delete"])
    def test_confirmed(self, svc, store, confirmation):
        assert svc.delete_market(SEED_MARKET_ID, confirmation) is True
        assert store.markets == ()

    @pytest.mark.parametrize("confirmation", ["", "del", "yes", "delete it", None])
    def test_not_confirmed(self, svc, store, confirmation):
        with pytest.raises(DeleteNotConfirmedError):
            svc.delete_market(SEED_MARKET_ID, confirmation)
        assert len(store.markets) == 1

    def test_custom_confirm_word(self, store, clock):
        cfg = Settings(STORAGE_BACKEND="memory", DELETE_CONFIRM_TEXT="remove")
        svc = MarketApplicationService(store, "u1", clock, cfg)
        with pytest.raises(DeleteNotConfirmedError, match="remove"):
            svc.delete_market(SEED_MARKET_ID, "delete")
        assert svc.delete_market(SEED_MARKET_ID, "remove") is True


class TestResolveMarket:
    def test_resolve(self, svc, store):
        svc.resolve_market(SEED_MARKET_ID, "yes")
        assert store.get(SEED_MARKET_ID).resolved == "yes"


class TestListMarkets:
    def test_all(self, svc):
        svc.create_market("A?", "Sports")
        svc.create_market("B?", "Weather")
        svc.create_market("C?", "Sports")
        resp = svc.list_markets()
        assert [v.question for v in resp.items] == ["C?", "B?", "A?", svc.get_market(SEED_MARKET_ID).question]
        assert resp.categories == ["All", "Sports", "Weather", "Live"]

    def test_category_filter(self, svc):
        svc.create_market("A?", "Sports")
        svc.create_market("B?", "Weather")
        resp = svc.list_markets("Sports")
        assert [v.question for v in resp.items] == ["A?"]
        assert resp.categories == ["All", "Weather", "Sports", "Live"]

    def test_unknown_category_empty(self, svc):
        assert svc.list_markets("Nope").items == []

    def test_total_votes_across_all_markets(self, svc, store):
        m = svc.create_market("A?", "Sports")
        svc.vote(m.id, "no")
        store.cast_vote(SEED_MARKET_ID, "u2", "yes")
        store.cast_vote(SEED_MARKET_ID, "u3", "yes")
        resp = svc.list_markets("Sports")
        assert resp.total_votes == 3
        assert resp.items[0].user_vote == "no"

    def test_views_use_clock(self, svc, clock):
        m = svc.create_market("A?", "", "1")
        assert svc.get_market(m.id).time_left == "1d 0h left"
        clock.advance(MS_PER_DAY)
        view = svc.get_market(m.id)
        assert view.is_locked is True
        assert view.time_left == "Expired"

    def test_get_market_unknown(self, svc):
        assert svc.get_market("nope") is None


class TestPersistenceThroughService:
    def test_reload_sees_changes(self, clock, cfg):
        kv = MemoryKeyValueStore()
        store = MarketStore(MarketRepository(kv, KEY), clock)
        store.initialize()
        svc = MarketApplicationService(store, "u1", clock, cfg)
        m = svc.create_market("Q?", "Live")
        svc.vote(m.id, "yes")

        reloaded = MarketStore(MarketRepository(kv, KEY), clock)
        reloaded.initialize()
        assert reloaded.markets == store.markets
