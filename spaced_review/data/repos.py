from contextlib import contextmanager

from django.db import IntegrityError, transaction

from ..domain.cards import ReviewCard, ReviewLogEntry
from ..domain.errors import CardNotFoundError, DuplicateCardError
from ..domain.logic import new_card
from .models import ReviewCardRecord, ReviewLog

CARD_FIELDS = [
    "interval_days",
    "repetition_count",
    "ease_factor",
    "correct_streak",
    "total_reviews",
    "average_response_time_ms",
    "next_review_at",
    "last_reviewed_at",
]


def to_card(row):
    return ReviewCard(
        owner_id=row.owner_id,
        item_id=row.item_id,
        interval_days=row.interval_days,
        repetition_count=row.repetition_count,
        ease_factor=row.ease_factor,
        next_review_at=row.next_review_at,
        last_reviewed_at=row.last_reviewed_at,
        created_at=row.created_at,
        correct_streak=row.correct_streak,
        total_reviews=row.total_reviews,
        average_response_time_ms=row.average_response_time_ms,
    )


def to_entry(row, created_at):
    card = ReviewCard(
        owner_id=row.owner_id,
        item_id=row.item_id,
        interval_days=row.interval_days,
        repetition_count=row.repetition_count,
        ease_factor=row.ease_factor,
        next_review_at=row.next_review_at,
        last_reviewed_at=row.reviewed_at,
        created_at=created_at,
        correct_streak=row.correct_streak,
        total_reviews=row.total_reviews,
        average_response_time_ms=row.average_response_time_ms,
    )
    return ReviewLogEntry(
        owner_id=row.owner_id,
        item_id=row.item_id,
        correct=row.correct,
        response_time_ms=row.response_time_ms,
        reviewed_at=row.reviewed_at,
        card=card,
        idempotency_key=row.idempotency_key,
    )


class DjangoCardStore:
    """Card store backed by the ReviewCardRecord / ReviewLog tables."""

    @contextmanager
    def locked(self, owner_id, item_id):
        """
        Open a transaction and lock the card row for update to avoid races.
        Everything done inside the block commits or rolls back together.
        """
        with transaction.atomic():
            # Lock existing (missing rows are reported by get_card)
            (ReviewCardRecord.objects
             .select_for_update()
             .filter(owner_id=owner_id, item_id=item_id)
             .first())
            yield

    def create_card(self, owner_id, item_id, now):
        card = new_card(owner_id, item_id, now)
        try:
            with transaction.atomic():
                ReviewCardRecord.objects.create(
                    owner_id=owner_id,
                    item_id=item_id,
                    created_at=card.created_at,
                    **{f: getattr(card, f) for f in CARD_FIELDS},
                )
        except IntegrityError:
            raise DuplicateCardError(owner_id, item_id)
        return card

    def get_card(self, owner_id, item_id):
        try:
            row = ReviewCardRecord.objects.get(owner_id=owner_id, item_id=item_id)
        except ReviewCardRecord.DoesNotExist:
            raise CardNotFoundError(owner_id, item_id)
        return to_card(row)

    def list_cards(self, owner_id):
        return [to_card(row) for row in ReviewCardRecord.objects.filter(owner_id=owner_id)]

    def list_due(self, owner_id, as_of):
        """Range query on the (owner_id, next_review_at) index."""
        rows = (ReviewCardRecord.objects
                .filter(owner_id=owner_id, next_review_at__lte=as_of)
                .order_by("next_review_at", "item_id"))
        return [to_card(row) for row in rows]

    def save_card(self, card):
        updated = (ReviewCardRecord.objects
                   .filter(owner_id=card.owner_id, item_id=card.item_id)
                   .update(**{f: getattr(card, f) for f in CARD_FIELDS}))
        if not updated:
            raise CardNotFoundError(card.owner_id, card.item_id)
        return card

    def add_log(self, entry):
        """
        Insert a ReviewLog row; if a concurrent duplicate key slips in,
        return the existing entry instead.
        """
        card = entry.card
        try:
            with transaction.atomic():
                ReviewLog.objects.create(
                    owner_id=entry.owner_id,
                    item_id=entry.item_id,
                    correct=entry.correct,
                    response_time_ms=entry.response_time_ms,
                    idempotency_key=entry.idempotency_key,
                    reviewed_at=entry.reviewed_at,
                    interval_days=card.interval_days,
                    repetition_count=card.repetition_count,
                    ease_factor=card.ease_factor,
                    correct_streak=card.correct_streak,
                    total_reviews=card.total_reviews,
                    average_response_time_ms=card.average_response_time_ms,
                    next_review_at=card.next_review_at,
                )
        except IntegrityError:
            # Duplicate idempotency key safeguard
            return self.find_log(entry.owner_id, entry.item_id, entry.idempotency_key), False
        return entry, True

    def find_log(self, owner_id, item_id, idempotency_key):
        if not idempotency_key:
            return None
        row = ReviewLog.objects.filter(
            owner_id=owner_id, item_id=item_id, idempotency_key=idempotency_key
        ).first()
        if row is None:
            return None
        return to_entry(row, self._created_at(owner_id, item_id))

    def list_logs(self, owner_id, item_id):
        created_at = self._created_at(owner_id, item_id)
        rows = (ReviewLog.objects
                .filter(owner_id=owner_id, item_id=item_id)
                .order_by("reviewed_at", "id"))
        return [to_entry(row, created_at) for row in rows]

    def _created_at(self, owner_id, item_id):
        return (ReviewCardRecord.objects
                .filter(owner_id=owner_id, item_id=item_id)
                .values_list("created_at", flat=True)
                .first())
