DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
EASE_BONUS = 0.1           # fixed bonus per correct review (quality grade 5)
EASE_PRECISION = 2         # decimal places kept on the ease factor

FIRST_INTERVAL_DAYS = 1    # after the first correct review
SECOND_INTERVAL_DAYS = 6   # after the second consecutive correct review
LAPSE_INTERVAL_DAYS = 1    # after any incorrect review
NEW_CARD_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 100 * 365  # ceiling for grown intervals (about a century)

ID_MAX_LENGTH = 64
IDEMPOTENCY_KEY_MAX_LENGTH = 64
