from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ReviewCard:
    """Scheduling state for one (owner, item) pair."""

    owner_id: str
    item_id: str
    interval_days: int
    repetition_count: int
    ease_factor: float
    next_review_at: datetime
    last_reviewed_at: datetime
    created_at: datetime
    correct_streak: int = 0
    total_reviews: int = 0
    average_response_time_ms: float = 0.0

    @property
    def key(self):
        return (self.owner_id, self.item_id)

    def is_due(self, as_of: datetime) -> bool:
        return self.next_review_at <= as_of


@dataclass(frozen=True)
class ReviewLogEntry:
    """One accepted review and the card state it produced."""

    owner_id: str
    item_id: str
    correct: bool
    response_time_ms: float
    reviewed_at: datetime
    card: ReviewCard
    idempotency_key: Optional[str] = None


@dataclass(frozen=True)
class ReviewSummary:
    owner_id: str
    as_of: datetime
    total_cards: int
    due_cards: int
    new_cards: int
    total_reviews: int
    average_response_time_ms: float
    next_due_at: Optional[datetime]
