"""
Persistence of verified payment records.

Functions flush but never commit; the calling service owns the transaction.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError
from app.db.models.payment import Payment

logger = logging.getLogger(__name__)


def find_by_subscription_id(db: Session, subscription_id: str) -> Optional[Payment]:
    return db.query(Payment).filter(
        Payment.razorpay_subscription_id == subscription_id
    ).first()


def create_payment_record(
    db: Session,
    payment_id: str,
    subscription_id: str,
    signature: str,
    user_id: Optional[int] = None,
    created_at: Optional[datetime] = None
) -> Payment:
    """
    Insert a payment record.

    The pending unit of work is rolled back when the insert is rejected.

    Raises:
        ConflictError: a record already exists for the payment id or the subscription id
    """
    payment = Payment(
        razorpay_payment_id=payment_id,
        razorpay_subscription_id=subscription_id,
        razorpay_signature=signature,
        user_id=user_id,
        created_at=created_at or datetime.now(timezone.utc),
    )
    db.add(payment)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        logger.warning(
            f"Duplicate payment record: payment_id={payment_id}, subscription_id={subscription_id}"
        )
        raise ConflictError("Payment already recorded for this subscription") from e

    logger.info(f"Payment record created: payment_id={payment_id}, subscription_id={subscription_id}")
    return payment


def delete_payment_record(db: Session, payment: Payment) -> None:
    db.delete(payment)
    db.flush()
    logger.info(
        f"Payment record deleted: payment_id={payment.razorpay_payment_id}, "
        f"subscription_id={payment.razorpay_subscription_id}"
    )
