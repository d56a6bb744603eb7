"""Pure market rules: tallies, expiry/lock checks, vote toggling, expiry parsing.

Every function takes `now_ms` explicitly where time matters; nothing here
reads a clock.
"""

import math
import re
from collections.abc import Mapping

from src.cs_common.clock import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE
from src.cs_common.enums import Ballot
from src.cs_market.domain.models import Market, VoteCounts

_BALLOT_VALUES = frozenset(b.value for b in Ballot)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_valid_ballot(value: object) -> bool:
    return isinstance(value, str) and value in _BALLOT_VALUES


def count_votes(votes: Mapping[str, str] | None) -> VoteCounts:
    ballots = list((votes or {}).values())
    yes = sum(1 for b in ballots if b == Ballot.YES.value)
    return VoteCounts(yes=yes, no=len(ballots) - yes)


def get_total_votes(votes: Mapping[str, str] | None) -> int:
    return len(votes or {})


def get_yes_percent(votes: Mapping[str, str] | None) -> int:
    """round(100 * yes / total), 50 when nobody has voted.

    Half-up rounding (49.5 -> 50, 50.5 -> 51), not Python's banker's round().
    """
    counts = count_votes(votes)
    if counts.total == 0:
        return 50
    return math.floor(counts.yes * 100 / counts.total + 0.5)


def is_expired(market: Market, now_ms: int) -> bool:
    return market.expires_at is not None and now_ms >= market.expires_at


def is_locked(market: Market, now_ms: int) -> bool:
    return market.resolved is not None or is_expired(market, now_ms)


def apply_vote(votes: Mapping[str, str], user_id: str, ballot: str) -> dict[str, str]:
    """Return a new vote mapping with the toggle applied.

    Same ballot as the user's current one removes it; anything else
    sets/overwrites. The input mapping is never modified.
    """
    new_votes = dict(votes)
    if new_votes.get(user_id) == ballot:
        del new_votes[user_id]
    else:
        new_votes[user_id] = ballot
    return new_votes


def parse_expiry_days(raw: object) -> int | None:
    """Parse an expiry-days input the way a number form field would.

    Accepts ints and strings with a leading integer ("7", " 7 days", "3.9"
    -> 3). Returns the value only when positive; None means no expiry.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        days = raw
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match is None:
            return None
        days = int(match.group(1))
    else:
        return None
    return days if days > 0 else None


def compute_expires_at(now_ms: int, expiry_days: object) -> int | None:
    days = parse_expiry_days(expiry_days)
    if days is None:
        return None
    return now_ms + days * MS_PER_DAY


def format_time_left(expires_at: int | None, now_ms: int) -> str | None:
    if expires_at is None:
        return None
    diff = expires_at - now_ms
    if diff <= 0:
        return "Expired"
    days = diff // MS_PER_DAY
    hours = (diff % MS_PER_DAY) // MS_PER_HOUR
    mins = (diff % MS_PER_HOUR) // MS_PER_MINUTE
    if days > 0:
        return f"{days}d {hours}h left"
    if hours > 0:
        return f"{hours}h {mins}m left"
    return f"{mins}m left"
