from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASE_FACTOR, ID_MAX_LENGTH, IDEMPOTENCY_KEY_MAX_LENGTH


class ReviewCardRecord(models.Model):
    owner_id = models.CharField(max_length=ID_MAX_LENGTH)
    item_id = models.CharField(max_length=ID_MAX_LENGTH)
    interval_days = models.PositiveIntegerField(default=1)
    repetition_count = models.PositiveIntegerField(default=0)
    ease_factor = models.FloatField(default=DEFAULT_EASE_FACTOR)
    correct_streak = models.PositiveIntegerField(default=0)
    total_reviews = models.PositiveIntegerField(default=0)
    average_response_time_ms = models.FloatField(default=0.0)
    next_review_at = models.DateTimeField()  # UTC
    last_reviewed_at = models.DateTimeField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        unique_together = (("owner_id", "item_id"),)
        indexes = [
            models.Index(fields=["owner_id", "next_review_at"], name="card_owner_due_idx"),
        ]


class ReviewLog(models.Model):
    owner_id = models.CharField(max_length=ID_MAX_LENGTH)
    item_id = models.CharField(max_length=ID_MAX_LENGTH)
    correct = models.BooleanField()
    response_time_ms = models.FloatField()
    idempotency_key = models.CharField(max_length=IDEMPOTENCY_KEY_MAX_LENGTH, null=True, blank=True)
    reviewed_at = models.DateTimeField(default=timezone.now)

    # Card state produced by this review
    interval_days = models.PositiveIntegerField()
    repetition_count = models.PositiveIntegerField()
    ease_factor = models.FloatField()
    correct_streak = models.PositiveIntegerField()
    total_reviews = models.PositiveIntegerField()
    average_response_time_ms = models.FloatField()
    next_review_at = models.DateTimeField()

    class Meta:
        # NULL keys never collide, so unkeyed reviews are unconstrained
        unique_together = (("owner_id", "item_id", "idempotency_key"),)
        indexes = [
            models.Index(fields=["owner_id", "item_id", "reviewed_at"], name="log_owner_item_idx"),
        ]
