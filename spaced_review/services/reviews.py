import structlog
from django.utils import timezone

from ..domain.cards import ReviewLogEntry, ReviewSummary
from ..domain.enums import OUTCOME_LABELS, outcome_of
from ..domain.errors import DuplicateCardError
from ..domain.logic import apply_review, validate_response_time
from ..utils.time import to_cst_iso

logger = structlog.get_logger()


class ReviewScheduler:
    """
    Spaced-repetition scheduling over an injected card store.

    The store owns persistence and per-card locking; the scheduler owns the
    review rules and the clock.
    """

    def __init__(self, store, clock=None):
        self.store = store
        self.clock = clock or timezone.now

    def create_card(self, owner_id, item_id):
        card = self.store.create_card(owner_id, item_id, self.clock())
        logger.info("card_created",
            owner_id=owner_id,
            item_id=item_id,
            next_review_utc=card.next_review_at.isoformat(),
        )
        return card

    def get_card(self, owner_id, item_id):
        return self.store.get_card(owner_id, item_id)

    def list_cards(self, owner_id):
        return self.store.list_cards(owner_id)

    def enroll(self, owner_id, item_ids):
        """Create cards for every item not yet enrolled; return the new ones."""
        existing = {card.item_id for card in self.store.list_cards(owner_id)}
        created = []
        for item_id in item_ids:
            if item_id in existing:
                continue
            existing.add(item_id)
            try:
                created.append(self.store.create_card(owner_id, item_id, self.clock()))
            except DuplicateCardError:
                # Enrolled concurrently since the listing above
                logger.info("enroll_skipped_duplicate", owner_id=owner_id, item_id=item_id)

        logger.info("items_enrolled",
            owner_id=owner_id,
            requested=len(item_ids),
            created=len(created),
        )
        return created

    def submit_review(self, owner_id, item_id, correct: bool, response_time_ms):
        card, _ = self.record_review(owner_id, item_id, correct, response_time_ms)
        return card

    def record_review(self, owner_id, item_id, correct: bool, response_time_ms,
                      idempotency_key=None):
        """
        Apply one review to a card. Returns (card, was_idempotent); a repeated
        idempotency_key returns the state its first review produced.
        """
        response_time_ms = validate_response_time(response_time_ms)
        logger.info("review_received",
            owner_id=owner_id,
            item_id=item_id,
            outcome=OUTCOME_LABELS[outcome_of(correct)],
            response_time_ms=response_time_ms,
            idempotency_key=idempotency_key,
        )

        # Serialize review update per (owner, item)
        with self.store.locked(owner_id, item_id):
            current = self.store.get_card(owner_id, item_id)

            # Fast path: return previous result if same idempotency_key
            existing = self.store.find_log(owner_id, item_id, idempotency_key)
            if existing:
                logger.info("idempotent_reuse",
                    owner_id=owner_id,
                    item_id=item_id,
                    next_review_utc=existing.card.next_review_at.isoformat(),
                    next_review_cst=to_cst_iso(existing.card.next_review_at),
                )
                return existing.card, True

            now = self.clock()
            updated = apply_review(current, correct, response_time_ms, now)
            entry, created = self.store.add_log(ReviewLogEntry(
                owner_id=owner_id,
                item_id=item_id,
                correct=bool(correct),
                response_time_ms=response_time_ms,
                reviewed_at=now,
                card=updated,
                idempotency_key=idempotency_key,
            ))
            if not created:
                return entry.card, True
            self.store.save_card(updated)

        logger.info("review_scheduled",
            owner_id=owner_id,
            item_id=item_id,
            interval_days=updated.interval_days,
            repetition_count=updated.repetition_count,
            ease_factor=updated.ease_factor,
            next_review_utc=updated.next_review_at.isoformat(),
            next_review_cst=to_cst_iso(updated.next_review_at),
        )
        return updated, False

    def get_due_cards(self, owner_id, as_of=None):
        """Cards due at or before as_of, earliest first, ties broken by item_id."""
        as_of = as_of or self.clock()
        return self.store.list_due(owner_id, as_of)

    def review_history(self, owner_id, item_id):
        self.store.get_card(owner_id, item_id)
        return self.store.list_logs(owner_id, item_id)

    def summarize(self, owner_id, as_of=None):
        as_of = as_of or self.clock()
        cards = self.store.list_cards(owner_id)

        total_reviews = sum(c.total_reviews for c in cards)
        if total_reviews:
            weighted = sum(c.average_response_time_ms * c.total_reviews for c in cards)
            average = weighted / total_reviews
        else:
            average = 0.0

        return ReviewSummary(
            owner_id=owner_id,
            as_of=as_of,
            total_cards=len(cards),
            due_cards=sum(1 for c in cards if c.is_due(as_of)),
            new_cards=sum(1 for c in cards if c.total_reviews == 0),
            total_reviews=total_reviews,
            average_response_time_ms=average,
            next_due_at=min((c.next_review_at for c in cards), default=None),
        )
