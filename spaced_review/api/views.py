from rest_framework import views, status
from rest_framework.response import Response
import structlog
import uuid
from ..apps import get_scheduler
from ..domain.enums import OUTCOME_LABELS, outcome_of
from ..utils.time import to_cst_iso
from .serializers import (
    AsOfQuerySerializer,
    CardInSerializer,
    EnrollInSerializer,
    ReviewInSerializer,
    card_payload,
    log_payload,
    summary_payload,
)

base_logger = structlog.get_logger()


def request_logger():
    # Create a unique request_id
    return base_logger.bind(request_id=str(uuid.uuid4()))


def parse_as_of(request):
    qs = AsOfQuerySerializer(data=request.query_params)
    qs.is_valid(raise_exception=True)
    return qs.validated_data.get("as_of")


class CardsView(views.APIView):
    def post(self, request):
        logger = request_logger()

        s = CardInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        card = get_scheduler().create_card(
            s.validated_data["owner_id"], s.validated_data["item_id"]
        )

        logger.info(
            "card_api_response",
            owner_id=card.owner_id,
            item_id=card.item_id,
            status=status.HTTP_201_CREATED,
        )
        return Response(card_payload(card), status=status.HTTP_201_CREATED)


class EnrollmentView(views.APIView):
    def post(self, request, owner_id):
        logger = request_logger()

        s = EnrollInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        created = get_scheduler().enroll(owner_id, s.validated_data["item_ids"])

        logger.info(
            "enrollment_api_response",
            owner_id=owner_id,
            created=len(created),
        )
        return Response(
            {"owner_id": owner_id, "created": [card_payload(c) for c in created]},
            status=status.HTTP_201_CREATED,
        )


class OwnerCardsView(views.APIView):
    def get(self, request, owner_id):
        cards = sorted(get_scheduler().list_cards(owner_id), key=lambda c: c.item_id)
        return Response({"owner_id": owner_id, "cards": [card_payload(c) for c in cards]})


class CardDetailView(views.APIView):
    def get(self, request, owner_id, item_id):
        return Response(card_payload(get_scheduler().get_card(owner_id, item_id)))


class CardHistoryView(views.APIView):
    def get(self, request, owner_id, item_id):
        entries = get_scheduler().review_history(owner_id, item_id)
        return Response(
            {
                "owner_id": owner_id,
                "item_id": item_id,
                "reviews": [log_payload(e) for e in entries],
            }
        )


class ReviewView(views.APIView):
    def post(self, request):
        logger = request_logger()

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        owner_id = s.validated_data["owner_id"]
        item_id = s.validated_data["item_id"]
        correct = s.validated_data["correct"]
        idem = s.validated_data.get("idempotency_key")

        card, was_idem = get_scheduler().record_review(
            owner_id, item_id, correct, s.validated_data["response_time_ms"], idem
        )
        status_code = status.HTTP_200_OK if was_idem else status.HTTP_201_CREATED

        # Log with request_id & relevant context
        logger.info(
            "review_api_response",
            owner_id=owner_id,
            item_id=item_id,
            correct=correct,
            idempotent=was_idem,
            interval_days=card.interval_days,
            next_review_utc=card.next_review_at.isoformat(),
            next_review_cst=to_cst_iso(card.next_review_at),
            status=status_code,
        )

        return Response(
            {
                **card_payload(card),
                "outcome_label": OUTCOME_LABELS[outcome_of(correct)],
                "idempotent": was_idem,
            },
            status=status_code,
        )


class DueCardsView(views.APIView):
    def get(self, request, owner_id):
        logger = request_logger()

        scheduler = get_scheduler()
        as_of = parse_as_of(request) or scheduler.clock()
        cards = scheduler.get_due_cards(owner_id, as_of)

        logger.info(
            "due_cards_api_response",
            owner_id=owner_id,
            as_of_utc=as_of.isoformat(),
            as_of_cst=to_cst_iso(as_of),
            card_count=len(cards),
        )

        return Response(
            {
                "owner_id": owner_id,
                "as_of_utc": as_of.isoformat(),
                "as_of_cst": to_cst_iso(as_of),
                "item_ids": [c.item_id for c in cards],
                "cards": [card_payload(c) for c in cards],
            }
        )


class SummaryView(views.APIView):
    def get(self, request, owner_id):
        summary = get_scheduler().summarize(owner_id, parse_as_of(request))
        return Response(summary_payload(summary))
