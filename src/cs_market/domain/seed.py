"""Built-in collection used when nothing usable is stored."""

from src.cs_market.domain.models import Market

SEED_MARKET_ID = "m1"
SEED_QUESTION = "Do you think Jack Sharpe is doing a good job in his presentation?"
SEED_CATEGORY = "Live"


def default_markets(now_ms: int) -> list[Market]:
    return [
        Market(
            id=SEED_MARKET_ID,
            question=SEED_QUESTION,
            category=SEED_CATEGORY,
            created_at=now_ms,
        )
    ]
