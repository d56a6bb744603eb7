"""Redis client factory — optional key-value backend for market + identity storage.

Synchronous client: store operations never yield control.
"""

import redis

from config.settings import settings

_redis_client: redis.Redis | None = None


def get_redis(url: str | None = None) -> redis.Redis:
    """Get or create the shared Redis client."""
    global _redis_client  # noqa: PLW0603
    if _redis_client is None:
        _redis_client = redis.Redis.from_url(
            url or settings.REDIS_URL,
            decode_responses=True,
        )
    return _redis_client


def close_redis() -> None:
    """Close the shared Redis client."""
    global _redis_client  # noqa: PLW0603
    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None
