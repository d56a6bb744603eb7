"""Time + random suffix ID generator for markets and anonymous users.

Not globally unique; collision odds are acceptable for a single-profile
store. MarketStore re-rolls on collision with an existing id.
"""

import secrets

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

MARKET_ID_PREFIX = "m_"
USER_ID_PREFIX = "user_"
MARKET_SUFFIX_LENGTH = 4
USER_SUFFIX_LENGTH = 8


def random_base36(length: int) -> str:
    """Return `length` random lowercase base36 characters."""
    if length < 0:
        raise ValueError(f"length must be >= 0, got {length}")
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_market_id(now_ms: int) -> str:
    """m_<epoch ms><4 base36 chars>, e.g. m_1718000000000k3xq."""
    return f"{MARKET_ID_PREFIX}{now_ms}{random_base36(MARKET_SUFFIX_LENGTH)}"


def generate_user_id() -> str:
    return f"{USER_ID_PREFIX}{random_base36(USER_SUFFIX_LENGTH)}"
