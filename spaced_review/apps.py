from django.apps import AppConfig
from django.conf import settings
from django.utils.module_loading import import_string

DEFAULT_STORE = "spaced_review.data.repos.DjangoCardStore"


class SpacedReviewConfig(AppConfig):
    name = "spaced_review"
    default_auto_field = "django.db.models.BigAutoField"

    scheduler = None

    def ready(self):
        from .services.reviews import ReviewScheduler

        options = getattr(settings, "SPACED_REVIEW", {})
        store_class = import_string(options.get("STORE", DEFAULT_STORE))
        self.scheduler = ReviewScheduler(store_class())


def get_scheduler():
    from django.apps import apps

    return apps.get_app_config("spaced_review").scheduler
