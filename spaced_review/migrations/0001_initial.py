import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ReviewCardRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("owner_id", models.CharField(max_length=64)),
                ("item_id", models.CharField(max_length=64)),
                ("interval_days", models.PositiveIntegerField(default=1)),
                ("repetition_count", models.PositiveIntegerField(default=0)),
                ("ease_factor", models.FloatField(default=2.5)),
                ("correct_streak", models.PositiveIntegerField(default=0)),
                ("total_reviews", models.PositiveIntegerField(default=0)),
                ("average_response_time_ms", models.FloatField(default=0.0)),
                ("next_review_at", models.DateTimeField()),
                ("last_reviewed_at", models.DateTimeField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "indexes": [models.Index(fields=["owner_id", "next_review_at"], name="card_owner_due_idx")],
                "unique_together": {("owner_id", "item_id")},
            },
        ),
        migrations.CreateModel(
            name="ReviewLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("owner_id", models.CharField(max_length=64)),
                ("item_id", models.CharField(max_length=64)),
                ("correct", models.BooleanField()),
                ("response_time_ms", models.FloatField()),
                ("idempotency_key", models.CharField(blank=True, max_length=64, null=True)),
                ("reviewed_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("interval_days", models.PositiveIntegerField()),
                ("repetition_count", models.PositiveIntegerField()),
                ("ease_factor", models.FloatField()),
                ("correct_streak", models.PositiveIntegerField()),
                ("total_reviews", models.PositiveIntegerField()),
                ("average_response_time_ms", models.FloatField()),
                ("next_review_at", models.DateTimeField()),
            ],
            options={
                "indexes": [models.Index(fields=["owner_id", "item_id", "reviewed_at"], name="log_owner_item_idx")],
                "unique_together": {("owner_id", "item_id", "idempotency_key")},
            },
        ),
    ]
