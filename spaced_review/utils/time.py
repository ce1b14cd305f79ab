import math
from datetime import timedelta, timezone as dt_tz

CST = dt_tz(timedelta(hours=8))  # China Standard Time

def to_cst_iso(dt_utc):
    return dt_utc.astimezone(CST).isoformat()

def add_days(dt, days: int):
    return dt + timedelta(days=days)

def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; 2.5 days must become 3
    return int(math.floor(value + 0.5))
