"""Domain models for cs_market — pure dataclasses, no business logic."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Market:
    id: str
    question: str
    category: str
    created_at: int                  # epoch ms
    expires_at: int | None = None    # epoch ms; None = never expires
    resolved: str | None = None      # "yes" | "no" | None
    votes: dict[str, str] = field(default_factory=dict)  # user_id -> "yes" | "no"


@dataclass(frozen=True)
class VoteCounts:
    yes: int
    no: int

    @property
    def total(self) -> int:
        return self.yes + self.no
