from rest_framework import exceptions, status
from rest_framework.views import exception_handler as drf_exception_handler

from ..domain.errors import CardNotFoundError, DuplicateCardError, InvalidReviewError


class CardConflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Card already exists."
    default_code = "duplicate_card"


def exception_handler(exc, context):
    """Map scheduler errors onto HTTP errors, then defer to DRF."""
    if isinstance(exc, DuplicateCardError):
        exc = CardConflict(str(exc))
    elif isinstance(exc, CardNotFoundError):
        exc = exceptions.NotFound(str(exc))
    elif isinstance(exc, InvalidReviewError):
        exc = exceptions.ValidationError({"detail": str(exc)})
    return drf_exception_handler(exc, context)
