class SpacedReviewError(Exception):
    """Base class for scheduler errors a caller can recover from."""


class CardError(SpacedReviewError):
    def __init__(self, owner_id, item_id):
        self.owner_id = owner_id
        self.item_id = item_id
        super().__init__(self.describe())

    def describe(self):
        return f"owner={self.owner_id} item={self.item_id}"


class DuplicateCardError(CardError):
    """A card already exists for this (owner, item) pair."""

    def describe(self):
        return f"Card already exists for owner={self.owner_id} item={self.item_id}"


class CardNotFoundError(CardError):
    """No card exists for this (owner, item) pair; create it first."""

    def describe(self):
        return f"No card for owner={self.owner_id} item={self.item_id}"


class InvalidReviewError(SpacedReviewError, ValueError):
    """Review input the scheduler cannot apply, e.g. a negative response time."""
