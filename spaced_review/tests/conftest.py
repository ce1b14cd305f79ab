from datetime import datetime, timedelta, timezone

import pytest
from rest_framework.test import APIClient

from spaced_review.data.memory import InMemoryCardStore
from spaced_review.services.reviews import ReviewScheduler

START = datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryCardStore()


@pytest.fixture
def scheduler(store, clock):
    """Fresh in-memory scheduler per test."""
    return ReviewScheduler(store, clock=clock)


@pytest.fixture
def api_client():
    return APIClient()
