"""
Monthly subscription report for administrators.

Buckets gateway subscriptions by the calendar month of their start time,
independent of year. Read-only: nothing is persisted.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from app.core.exceptions import UpstreamError
from app.services.razorpay_service import GatewayError, PaymentGateway

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
]

DEFAULT_COUNT = 10
DEFAULT_SKIP = 0


def month_of(start_at: Any) -> Optional[str]:
    """Month name for a UNIX-seconds timestamp (UTC), or None if unusable."""
    if start_at is None or isinstance(start_at, bool):
        return None
    try:
        moment = datetime.fromtimestamp(float(start_at), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None
    return MONTH_NAMES[moment.month - 1]


def aggregate_monthly(items: Iterable[Dict[str, Any]]) -> Tuple[Dict[str, int], List[int]]:
    """
    Count items per start month.

    Returns:
        (final_months, monthly_sales_record): the named histogram in calendar
        order and the same twelve counts as a list
    """
    final_months = {month: 0 for month in MONTH_NAMES}

    for item in items or []:
        month = month_of(item.get("start_at")) if isinstance(item, dict) else None
        if month:
            final_months[month] += 1

    monthly_sales_record = [final_months[month] for month in MONTH_NAMES]
    return final_months, monthly_sales_record


def get_payments_report(
    gateway: PaymentGateway,
    count: int = DEFAULT_COUNT,
    skip: int = DEFAULT_SKIP
) -> Dict[str, Any]:
    """Fetch one page of gateway subscriptions and summarise it per month."""
    try:
        all_payments = gateway.list_subscriptions(count=count, skip=skip)
    except GatewayError as e:
        raise UpstreamError(e.description or "Failed to fetch payments", e.status_code or 500) from e
    final_months, monthly_sales_record = aggregate_monthly(all_payments.get("items", []))

    logger.info(f"Payments report built: count={count}, skip={skip}, items={sum(monthly_sales_record)}")

    return {
        "all_payments": all_payments,
        "final_months": final_months,
        "monthly_sales_record": monthly_sales_record,
    }
