import logging
from dataclasses import replace
from datetime import timedelta

import pytest

from spaced_review.config import MAX_INTERVAL_DAYS, MIN_EASE_FACTOR
from spaced_review.domain.errors import InvalidReviewError
from spaced_review.domain.logic import apply_review, new_card, next_interval, validate_response_time
from spaced_review.utils.time import round_half_up, to_cst_iso

from .conftest import START

logger = logging.getLogger(__name__)

# Helpers

def review_many(card, outcomes, step=timedelta(days=1)):
    at = START
    history = []
    for correct in outcomes:
        at = at + step
        card = apply_review(card, correct, 1500, at)
        history.append(card)
    return card, history


# Tests

def test_new_card_defaults():
    """A new card is due one day after creation with ease 2.5."""
    card = new_card("1", "apple", START)

    assert card.interval_days == 1
    assert card.repetition_count == 0
    assert card.ease_factor == 2.5
    assert card.correct_streak == 0
    assert card.total_reviews == 0
    assert card.average_response_time_ms == 0.0
    assert card.last_reviewed_at == START
    assert card.next_review_at == START + timedelta(days=1)


def test_three_correct_reviews_follow_sm2_steps():
    """Repetitions 1, 2, 3 give intervals 1, 6, round(6 * 2.8)."""
    card = new_card("1", "apple", START)

    first = apply_review(card, True, 2000, START)
    assert (first.repetition_count, first.interval_days, first.ease_factor) == (1, 1, 2.6)
    assert first.correct_streak == 1
    assert first.total_reviews == 1
    assert first.average_response_time_ms == 2000.0

    second = apply_review(first, True, 2000, START)
    assert (second.repetition_count, second.interval_days, second.ease_factor) == (2, 6, 2.7)

    third = apply_review(second, True, 2000, START)
    assert (third.repetition_count, third.interval_days, third.ease_factor) == (3, 17, 2.8)
    logger.info("✓ Passed: intervals 1 → 6 → 17")


def test_incorrect_review_resets_and_keeps_ease():
    card, _ = review_many(new_card("1", "apple", START), [True, True, True])

    lapsed = apply_review(card, False, 4000, START)

    assert lapsed.repetition_count == 0
    assert lapsed.correct_streak == 0
    assert lapsed.interval_days == 1
    assert lapsed.ease_factor == 2.8
    assert lapsed.total_reviews == 4


@pytest.mark.parametrize("outcomes", [
    [True] * 8,
    [True, True, True, False, True, True, True, True],
    [False] * 5,
    [True, False] * 6,
])
def test_incorrect_review_always_resets(outcomes):
    """Whatever came before, a miss lands on interval 1, repetition 0."""
    card, _ = review_many(new_card("1", "apple", START), outcomes)
    lapsed = apply_review(card, False, 100, START)

    assert (lapsed.interval_days, lapsed.repetition_count, lapsed.correct_streak) == (1, 0, 0)


def test_invariants_hold_over_long_runs():
    outcomes = [True, True, False, True, True, True, True, False, False, True] * 5
    _, history = review_many(new_card("1", "apple", START), outcomes)

    for card in history:
        assert card.ease_factor >= MIN_EASE_FACTOR
        assert card.interval_days >= 1
        assert isinstance(card.interval_days, int)
        assert card.next_review_at == card.last_reviewed_at + timedelta(days=card.interval_days)


def test_intervals_never_shrink_while_growing():
    _, history = review_many(new_card("1", "apple", START), [True] * 10)
    intervals = [c.interval_days for c in history if c.repetition_count >= 3]

    assert all(a <= b for a, b in zip(intervals, intervals[1:]))
    logger.info("✓ Passed: intervals grew monotonically %s", intervals)


def test_ease_floor_applies_to_low_ease():
    card = new_card("1", "apple", START)
    low = replace(card, ease_factor=1.0)

    assert apply_review(low, True, 10, START).ease_factor == MIN_EASE_FACTOR
    assert apply_review(low, False, 10, START).ease_factor == MIN_EASE_FACTOR


def test_running_mean_of_response_time():
    card = new_card("1", "apple", START)
    for ms in (1000, 2000, 6000):
        card = apply_review(card, True, ms, START)

    assert card.average_response_time_ms == pytest.approx(3000.0)


def test_input_card_is_not_modified():
    card = new_card("1", "apple", START)
    apply_review(card, True, 100, START)

    assert card.total_reviews == 0
    assert card.repetition_count == 0


@pytest.mark.parametrize("bad", [-1, float("nan"), float("inf"), "fast", None, True])
def test_rejects_bad_response_time(bad):
    with pytest.raises(InvalidReviewError):
        validate_response_time(bad)


def test_interval_rounds_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(16.8) == 17
    assert round_half_up(16.2) == 16
    assert next_interval(3, 5, 1.3) == 7  # 6.5 → 7


def test_long_correct_run_stays_representable():
    """Thirty correct reviews in a row: growth stops at the ceiling, no overflow."""
    _, history = review_many(new_card("1", "apple", START), [True] * 30)
    intervals = [c.interval_days for c in history]

    assert all(i >= 1 for i in intervals)
    assert all(a <= b for a, b in zip(intervals, intervals[1:]))
    assert intervals[-1] == MAX_INTERVAL_DAYS
    for card in history:
        assert card.next_review_at == card.last_reviewed_at + timedelta(days=card.interval_days)
        to_cst_iso(card.next_review_at)
    logger.info("✓ Passed: intervals capped at %s days", MAX_INTERVAL_DAYS)


def test_interval_ceiling():
    assert next_interval(3, MAX_INTERVAL_DAYS, 3.0) == MAX_INTERVAL_DAYS
    assert next_interval(5, MAX_INTERVAL_DAYS - 10, 1.3) == MAX_INTERVAL_DAYS
