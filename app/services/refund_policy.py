from datetime import datetime, timedelta, timezone
from typing import Optional

from app.core.config import REFUND_WINDOW_DAYS

REFUND_WINDOW = timedelta(days=REFUND_WINDOW_DAYS)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def elapsed_ms(paid_at: datetime, now: Optional[datetime] = None) -> int:
    """Milliseconds between the payment and now."""
    now = _as_utc(now or datetime.now(timezone.utc))
    delta = now - _as_utc(paid_at)
    return int(delta.total_seconds() * 1000)


def is_refund_eligible(
    paid_at: datetime,
    now: Optional[datetime] = None,
    window: timedelta = REFUND_WINDOW
) -> bool:
    """
    A payment is refundable until the elapsed time exceeds the window.

    Elapsed time exactly equal to the window is still eligible.
    """
    window_ms = int(window.total_seconds() * 1000)
    return not elapsed_ms(paid_at, now) > window_ms
