# Django discovers models through <app>.models
from .data.models import ReviewCardRecord, ReviewLog  # noqa: F401
