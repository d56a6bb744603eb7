"""Global enums. Values are the literal strings stored in the persisted payload."""

from enum import Enum


class Ballot(str, Enum):
    YES = "yes"
    NO = "no"


class MarketState(str, Enum):
    """Display state derived from resolved/expiresAt; never persisted."""
    OPEN = "OPEN"
    EXPIRED = "EXPIRED"
    RESOLVED = "RESOLVED"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    FILE = "file"
    REDIS = "redis"
