from django.urls import path
from .views import (
    CardDetailView,
    CardHistoryView,
    CardsView,
    DueCardsView,
    EnrollmentView,
    OwnerCardsView,
    ReviewView,
    SummaryView,
)

urlpatterns = [
    path("cards", CardsView.as_view(), name="cards"),
    path("reviews", ReviewView.as_view(), name="review"),
    path("owners/<str:owner_id>/cards", OwnerCardsView.as_view(), name="owner-cards"),
    path("owners/<str:owner_id>/cards/<str:item_id>", CardDetailView.as_view(), name="card-detail"),
    path("owners/<str:owner_id>/cards/<str:item_id>/history", CardHistoryView.as_view(), name="card-history"),
    path("owners/<str:owner_id>/enrollments", EnrollmentView.as_view(), name="enrollments"),
    path("owners/<str:owner_id>/due-cards", DueCardsView.as_view(), name="due-cards"),
    path("owners/<str:owner_id>/summary", SummaryView.as_view(), name="summary"),
]
