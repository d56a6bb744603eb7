"""Pydantic record model for the persisted markets payload.

Field names (camelCase) are the literal on-disk keys:
  [{"id", "question", "category", "createdAt", "expiresAt", "resolved", "votes"}]
Changing them requires a new MARKETS_STORAGE_KEY version.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from src.cs_market.domain.models import Market

BallotValue = Literal["yes", "no"]


class MarketRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    question: str
    category: str
    created_at: int = Field(alias="createdAt")
    expires_at: int | None = Field(default=None, alias="expiresAt")
    resolved: BallotValue | None = None
    votes: dict[str, BallotValue] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, m: Market) -> "MarketRecord":
        return cls(
            id=m.id,
            question=m.question,
            category=m.category,
            created_at=m.created_at,
            expires_at=m.expires_at,
            resolved=m.resolved,
            votes=dict(m.votes),
        )

    def to_domain(self) -> Market:
        return Market(
            id=self.id,
            question=self.question,
            category=self.category,
            created_at=self.created_at,
            expires_at=self.expires_at,
            resolved=self.resolved,
            votes=dict(self.votes),
        )


MarketRecordList = TypeAdapter(list[MarketRecord])
