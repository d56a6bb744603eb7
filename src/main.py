"""Composition root — builds the application state a presentation layer holds.

Usage:
    state = create_app()
    state.store.subscribe(render)
    state.service.create_market("Will it rain tomorrow?", "Weather", "1")
"""

import logging
from dataclasses import dataclass

from config.settings import Settings, settings
from src.cs_common.clock import SystemClock
from src.cs_common.kv_store import KeyValueStore, build_kv_store
from src.cs_market.application.identity import get_or_create_user_id
from src.cs_market.application.service import MarketApplicationService
from src.cs_market.application.store import MarketStore
from src.cs_market.domain.repository import ClockProtocol
from src.cs_market.infrastructure.persistence import MarketRepository

logger = logging.getLogger("cs.app")


@dataclass
class AppState:
    settings: Settings
    kv: KeyValueStore
    store: MarketStore
    service: MarketApplicationService
    user_id: str


def configure_logging(cfg: Settings) -> None:
    level = logging.DEBUG if cfg.DEBUG else getattr(logging, cfg.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app(
    cfg: Settings | None = None,
    kv: KeyValueStore | None = None,
    clock: ClockProtocol | None = None,
) -> AppState:
    """Wire storage, store and service; load persisted markets."""
    cfg = cfg or settings
    kv = kv if kv is not None else build_kv_store(cfg)
    clock = clock or SystemClock()

    repo = MarketRepository(kv, cfg.MARKETS_STORAGE_KEY)
    store = MarketStore(repo, clock, default_category=cfg.DEFAULT_CATEGORY)
    store.initialize()

    user_id = get_or_create_user_id(kv, cfg.USER_ID_STORAGE_KEY)
    service = MarketApplicationService(store, user_id, clock, cfg)
    logger.info("%s ready: %d markets, user %s", cfg.APP_NAME, len(store.markets), user_id)
    return AppState(settings=cfg, kv=kv, store=store, service=service, user_id=user_id)
