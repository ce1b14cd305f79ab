import math
from dataclasses import replace

from .cards import ReviewCard
from .errors import InvalidReviewError
from ..config import (
    DEFAULT_EASE_FACTOR,
    EASE_BONUS,
    EASE_PRECISION,
    FIRST_INTERVAL_DAYS,
    LAPSE_INTERVAL_DAYS,
    MAX_INTERVAL_DAYS,
    MIN_EASE_FACTOR,
    NEW_CARD_INTERVAL_DAYS,
    SECOND_INTERVAL_DAYS,
)
from ..utils.time import add_days, round_half_up


def new_card(owner_id: str, item_id: str, now) -> ReviewCard:
    return ReviewCard(
        owner_id=owner_id,
        item_id=item_id,
        interval_days=NEW_CARD_INTERVAL_DAYS,
        repetition_count=0,
        ease_factor=DEFAULT_EASE_FACTOR,
        next_review_at=add_days(now, NEW_CARD_INTERVAL_DAYS),
        last_reviewed_at=now,
        created_at=now,
    )


def validate_response_time(response_time_ms) -> float:
    if isinstance(response_time_ms, bool) or not isinstance(response_time_ms, (int, float)):
        raise InvalidReviewError(f"response_time_ms must be a number, got {response_time_ms!r}")
    if not math.isfinite(response_time_ms) or response_time_ms < 0:
        raise InvalidReviewError(f"response_time_ms must be finite and >= 0, got {response_time_ms!r}")
    return float(response_time_ms)


def next_ease(ease_factor: float) -> float:
    return max(MIN_EASE_FACTOR, round(ease_factor + EASE_BONUS, EASE_PRECISION))


def next_interval(repetition_count: int, interval_days: int, ease_factor: float) -> int:
    if repetition_count == 1:
        return FIRST_INTERVAL_DAYS
    if repetition_count == 2:
        return SECOND_INTERVAL_DAYS
    proposed = round_half_up(interval_days * ease_factor)
    # Never shrink while growing, never past the ceiling, never below one day
    return max(1, min(max(proposed, interval_days), MAX_INTERVAL_DAYS))


def apply_review(card: ReviewCard, correct: bool, response_time_ms, reviewed_at) -> ReviewCard:
    """
    Return the card state after one review. The input card is not modified.

    A correct review bumps the ease factor first and then grows the interval
    with the bumped value; an incorrect review resets the card to its
    new-card interval and keeps the ease factor.
    """
    response_time_ms = validate_response_time(response_time_ms)

    total = card.total_reviews + 1
    average = (card.average_response_time_ms * (total - 1) + response_time_ms) / total

    if correct:
        repetitions = card.repetition_count + 1
        streak = card.correct_streak + 1
        ease = next_ease(card.ease_factor)
        interval = next_interval(repetitions, card.interval_days, ease)
    else:
        repetitions = 0
        streak = 0
        ease = max(MIN_EASE_FACTOR, card.ease_factor)
        interval = LAPSE_INTERVAL_DAYS

    return replace(
        card,
        interval_days=interval,
        repetition_count=repetitions,
        ease_factor=ease,
        correct_streak=streak,
        total_reviews=total,
        average_response_time_ms=average,
        last_reviewed_at=reviewed_at,
        next_review_at=add_days(reviewed_at, interval),
    )


def due_order(card: ReviewCard):
    return (card.next_review_at, card.item_id)
