from rest_framework import serializers

from ..config import ID_MAX_LENGTH, IDEMPOTENCY_KEY_MAX_LENGTH
from ..utils.time import to_cst_iso

class CardInSerializer(serializers.Serializer):
    owner_id = serializers.CharField(max_length=ID_MAX_LENGTH)
    item_id = serializers.CharField(max_length=ID_MAX_LENGTH)

class EnrollInSerializer(serializers.Serializer):
    item_ids = serializers.ListField(
        child=serializers.CharField(max_length=ID_MAX_LENGTH),
        allow_empty=False,
    )

class ReviewInSerializer(serializers.Serializer):
    owner_id = serializers.CharField(max_length=ID_MAX_LENGTH)
    item_id = serializers.CharField(max_length=ID_MAX_LENGTH)
    correct = serializers.BooleanField()
    response_time_ms = serializers.FloatField(min_value=0)
    idempotency_key = serializers.CharField(max_length=IDEMPOTENCY_KEY_MAX_LENGTH, required=False)

class AsOfQuerySerializer(serializers.Serializer):
    as_of = serializers.DateTimeField(required=False)  # ISO-8601


def card_payload(card):
    return {
        "owner_id": card.owner_id,
        "item_id": card.item_id,
        "interval_days": card.interval_days,
        "repetition_count": card.repetition_count,
        "ease_factor": card.ease_factor,
        "correct_streak": card.correct_streak,
        "total_reviews": card.total_reviews,
        "average_response_time_ms": card.average_response_time_ms,
        "next_review_utc": card.next_review_at.isoformat(),
        "next_review_cst": to_cst_iso(card.next_review_at),
        "last_reviewed_utc": card.last_reviewed_at.isoformat(),
        "created_utc": card.created_at.isoformat(),
    }


def log_payload(entry):
    return {
        "correct": entry.correct,
        "response_time_ms": entry.response_time_ms,
        "reviewed_utc": entry.reviewed_at.isoformat(),
        "reviewed_cst": to_cst_iso(entry.reviewed_at),
        "idempotency_key": entry.idempotency_key,
        "interval_days": entry.card.interval_days,
        "repetition_count": entry.card.repetition_count,
        "ease_factor": entry.card.ease_factor,
        "next_review_utc": entry.card.next_review_at.isoformat(),
    }


def summary_payload(summary):
    next_due = summary.next_due_at
    return {
        "owner_id": summary.owner_id,
        "as_of_utc": summary.as_of.isoformat(),
        "total_cards": summary.total_cards,
        "due_cards": summary.due_cards,
        "new_cards": summary.new_cards,
        "total_reviews": summary.total_reviews,
        "average_response_time_ms": summary.average_response_time_ms,
        "next_due_utc": next_due.isoformat() if next_due else None,
        "next_due_cst": to_cst_iso(next_due) if next_due else None,
    }
