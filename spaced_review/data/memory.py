import threading
from contextlib import contextmanager

from ..domain.errors import CardNotFoundError, DuplicateCardError
from ..domain.logic import due_order, new_card


class InMemoryCardStore:
    """
    Dict-backed card store. Nothing survives the process; construct one per
    scheduler (or per test) and pass it in.
    """

    def __init__(self):
        self._cards = {}
        self._logs = {}
        self._key_locks = {}
        self._guard = threading.Lock()

    def _lock_for(self, key):
        with self._guard:
            return self._key_locks.setdefault(key, threading.Lock())

    @contextmanager
    def locked(self, owner_id, item_id):
        # Serialize read-modify-write per (owner, item)
        lock = self._lock_for((owner_id, item_id))
        with lock:
            yield

    def create_card(self, owner_id, item_id, now):
        key = (owner_id, item_id)
        with self._guard:
            if key in self._cards:
                raise DuplicateCardError(owner_id, item_id)
            card = new_card(owner_id, item_id, now)
            self._cards[key] = card
        return card

    def get_card(self, owner_id, item_id):
        card = self._cards.get((owner_id, item_id))
        if card is None:
            raise CardNotFoundError(owner_id, item_id)
        return card

    def list_cards(self, owner_id):
        with self._guard:
            return [c for (owner, _), c in self._cards.items() if owner == owner_id]

    def save_card(self, card):
        with self._guard:
            if card.key not in self._cards:
                raise CardNotFoundError(card.owner_id, card.item_id)
            self._cards[card.key] = card
        return card

    def list_due(self, owner_id, as_of):
        return sorted((c for c in self.list_cards(owner_id) if c.is_due(as_of)), key=due_order)

    def add_log(self, entry):
        existing = self.find_log(entry.owner_id, entry.item_id, entry.idempotency_key)
        if existing is not None:
            return existing, False
        with self._guard:
            self._logs.setdefault((entry.owner_id, entry.item_id), []).append(entry)
        return entry, True

    def find_log(self, owner_id, item_id, idempotency_key):
        if not idempotency_key:
            return None
        for entry in self._logs.get((owner_id, item_id), []):
            if entry.idempotency_key == idempotency_key:
                return entry
        return None

    def list_logs(self, owner_id, item_id):
        return list(self._logs.get((owner_id, item_id), []))
