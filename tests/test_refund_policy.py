"""
Unit tests for the refund window.
"""
from datetime import datetime, timedelta, timezone

from app.services.refund_policy import REFUND_WINDOW, elapsed_ms, is_refund_eligible

NOW = datetime(2026, 3, 20, 12, 0, 0, tzinfo=timezone.utc)


def test_refund_window_is_fourteen_days():
    assert REFUND_WINDOW == timedelta(days=14)


def test_recent_payment_is_eligible():
    assert is_refund_eligible(NOW - timedelta(days=10), NOW) is True


def test_exactly_fourteen_days_is_eligible():
    """The boundary itself is still inside the window."""
    assert is_refund_eligible(NOW - timedelta(days=14), NOW) is True


def test_one_millisecond_past_window_is_not_eligible():
    paid_at = NOW - timedelta(days=14, milliseconds=1)
    assert is_refund_eligible(paid_at, NOW) is False


def test_old_payment_is_not_eligible():
    assert is_refund_eligible(NOW - timedelta(days=30), NOW) is False


def test_naive_timestamps_are_treated_as_utc():
    """SQLite returns naive datetimes; they compare as UTC."""
    paid_at = (NOW - timedelta(days=3)).replace(tzinfo=None)
    assert elapsed_ms(paid_at, NOW) == 3 * 24 * 60 * 60 * 1000
    assert is_refund_eligible(paid_at, NOW) is True


def test_custom_window():
    paid_at = NOW - timedelta(days=2)
    assert is_refund_eligible(paid_at, NOW, window=timedelta(days=1)) is False
