"""Pydantic schemas for the caller layer: create request + read-side views.

Create request limits come from validation context so they follow Settings:
  CreateMarketRequest.model_validate(data, context={"question_max_length": 200, ...})
Missing context keys fall back to the module defaults.
"""

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from src.cs_common.enums import Ballot, MarketState
from src.cs_market.domain.models import Market
from src.cs_market.domain.rules import (
    count_votes,
    format_time_left,
    get_yes_percent,
    is_expired,
    is_locked,
    parse_expiry_days,
)

QUESTION_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 30
DEFAULT_CATEGORY = "General"
ALL_CATEGORIES = "All"


def _ctx(info: ValidationInfo, key: str, default: Any) -> Any:
    return (info.context or {}).get(key, default)


# ---------------------------------------------------------------------------
# Create request
# ---------------------------------------------------------------------------


class CreateMarketRequest(BaseModel):
    question: str
    category: str = Field(default="", validate_default=True)
    expiry_days: int | None = None

    @field_validator("question")
    @classmethod
    def _question(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if not v:
            raise ValueError("question must not be blank")
        max_len = _ctx(info, "question_max_length", QUESTION_MAX_LENGTH)
        if len(v) > max_len:
            raise ValueError(f"question longer than {max_len} characters")
        return v

    @field_validator("category")
    @classmethod
    def _category(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        max_len = _ctx(info, "category_max_length", CATEGORY_MAX_LENGTH)
        if len(v) > max_len:
            raise ValueError(f"category longer than {max_len} characters")
        return v or _ctx(info, "default_category", DEFAULT_CATEGORY)

    @field_validator("expiry_days", mode="before")
    @classmethod
    def _expiry_days(cls, v: object) -> int | None:
        # Blank / non-numeric / non-positive all mean "no expiry"
        return parse_expiry_days(v)


# ---------------------------------------------------------------------------
# Market view (derived fields for one user at one instant)
# ---------------------------------------------------------------------------


class MarketView(BaseModel):
    id: str
    question: str
    category: str
    created_at: int
    expires_at: int | None
    resolved: str | None
    state: MarketState
    yes_percent: int
    yes_count: int
    no_count: int
    total_votes: int
    user_vote: Ballot | None
    is_expired: bool
    is_locked: bool
    time_left: str | None

    @classmethod
    def from_domain(cls, m: Market, user_id: str, now_ms: int) -> "MarketView":
        counts = count_votes(m.votes)
        expired = is_expired(m, now_ms)
        if m.resolved is not None:
            state = MarketState.RESOLVED
        elif expired:
            state = MarketState.EXPIRED
        else:
            state = MarketState.OPEN
        user_vote = m.votes.get(user_id)
        return cls(
            id=m.id,
            question=m.question,
            category=m.category,
            created_at=m.created_at,
            expires_at=m.expires_at,
            resolved=m.resolved,
            state=state,
            yes_percent=get_yes_percent(m.votes),
            yes_count=counts.yes,
            no_count=counts.no,
            total_votes=counts.total,
            user_vote=Ballot(user_vote) if user_vote else None,
            is_expired=expired,
            is_locked=is_locked(m, now_ms),
            time_left=format_time_left(m.expires_at, now_ms),
        )


class MarketListResponse(BaseModel):
    items: list[MarketView]
    categories: list[str]   # "All" first, then each category in collection order
    total_votes: int        # across every market, not just the filtered items
