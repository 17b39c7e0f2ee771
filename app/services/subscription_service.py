"""
Subscription lifecycle for a user.

States stored on the user row:

    none --create--> created --verify--> active --cancel--> inactive

Cancellation is committed as soon as the gateway confirms it. The refund that
follows is a separate unit of work: if it is refused (window elapsed, missing
payment record, gateway error) the subscription stays cancelled.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core import config
from app.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PreconditionError,
    RefundPolicyError,
    UpstreamError,
    VerificationError,
)
from app.core.logging_config import sanitize_log_data
from app.db.models.payment import Payment
from app.db.models.user import User
from app.services.payment_record_service import (
    create_payment_record,
    delete_payment_record,
    find_by_subscription_id,
)
from app.services.razorpay_service import GatewayError, GatewaySubscription, PaymentGateway
from app.services.refund_policy import is_refund_eligible
from app.services.signature_service import verify_signature

logger = logging.getLogger(__name__)

STATUS_CREATED = "created"
STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"
STATUS_CANCELLED = "cancelled"

# Statuses the gateway may report for a cancelled subscription; locally both
# mean the subscription can no longer be cancelled.
TERMINAL_STATUSES = (STATUS_INACTIVE, STATUS_CANCELLED)


def _lock_user(db: Session, user_id: int) -> User:
    """Re-read the user row under a row lock for the duration of the transaction."""
    user = (
        db.query(User)
        .filter(User.id == user_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if not user:
        raise NotFoundError("User not found")
    return user


def _commit(db: Session, user: User) -> None:
    try:
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning(f"Concurrent subscription update rejected: user_id={user.id}")
        raise ConflictError("Subscription was modified concurrently, please retry") from e


def _upstream(error: GatewayError, default_message: str) -> UpstreamError:
    return UpstreamError(error.description or default_message, error.status_code or 500)


def create_subscription(
    db: Session,
    user: User,
    gateway: PaymentGateway,
    plan_id: Optional[str] = None,
    total_count: Optional[int] = None
) -> str:
    """
    Create a monthly gateway subscription for the user and store it as created.

    Returns:
        The gateway subscription id
    """
    if user.is_admin:
        raise AuthorizationError("Admins cannot purchase a subscription")

    plan_id = plan_id or config.RAZORPAY_PLAN_ID
    total_count = total_count or config.SUBSCRIPTION_TOTAL_COUNT

    try:
        user = _lock_user(db, user.id)
        try:
            subscription = gateway.create_subscription(
                plan_id=plan_id,
                customer_notify=1,
                total_count=total_count,
            )
        except GatewayError as e:
            raise _upstream(e, "Failed to create subscription") from e

        user.subscription_id = subscription.id
        user.subscription_status = subscription.status
        _commit(db, user)
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Subscription created: user_id={user.id}, subscription_id={subscription.id}, "
        f"status={subscription.status}"
    )
    return subscription.id


def verify_subscription(
    db: Session,
    user: User,
    payment_id: str,
    signature: str,
    subscription_id: Optional[str] = None,
    secret: Optional[str] = None
) -> Payment:
    """
    Verify the gateway's payment signature and activate the subscription.

    The signature is checked against the subscription id stored for the user;
    a client-supplied subscription_id is only compared and logged. The payment
    record and the status change are committed together.
    """
    secret = secret or config.RAZORPAY_SECRET

    try:
        user = _lock_user(db, user.id)
        stored_subscription_id = user.subscription_id
        if not stored_subscription_id:
            raise PreconditionError("No subscription found, please subscribe first")

        if subscription_id and subscription_id != stored_subscription_id:
            logger.warning(
                f"Client subscription id differs from stored one: user_id={user.id}, "
                f"client={subscription_id}, stored={stored_subscription_id}"
            )

        if not verify_signature(payment_id, stored_subscription_id, signature, secret):
            logger.warning(f"Payment signature mismatch: user_id={user.id}, payment_id={payment_id}")
            raise VerificationError("Payment not verified, please try again.")

        payment = create_payment_record(
            db,
            payment_id=payment_id,
            subscription_id=stored_subscription_id,
            signature=signature,
            user_id=user.id,
        )
        user.subscription_status = STATUS_ACTIVE
        _commit(db, user)
    except Exception:
        db.rollback()
        raise

    logger.info(
        f"Payment verified: user_id={user.id}, payment_id={payment_id}, "
        f"subscription_id={stored_subscription_id}"
    )
    return payment


def cancel_subscription(
    db: Session,
    user: User,
    gateway: PaymentGateway,
    now: Optional[datetime] = None
) -> GatewaySubscription:
    """
    Cancel the user's subscription at the gateway, then refund if still eligible.

    Raises:
        AuthorizationError: user is an administrator
        PreconditionError: no subscription, or already cancelled
        UpstreamError: gateway refused the cancellation or the refund
        NotFoundError: no payment record for the subscription
        RefundPolicyError: refund window has elapsed (cancellation still stands)
    """
    if user.is_admin:
        raise AuthorizationError("Admin cannot cancel subscription")

    try:
        user = _lock_user(db, user.id)
        subscription_id = user.subscription_id
        if not subscription_id:
            raise PreconditionError("No active subscription found")

        if user.subscription_status in TERMINAL_STATUSES:
            logger.info(f"Subscription already cancelled: user_id={user.id}, subscription_id={subscription_id}")
            raise PreconditionError("Subscription is already cancelled or inactive.")

        logger.info(f"Cancelling subscription: user_id={user.id}, subscription_id={subscription_id}")
        try:
            cancelled = gateway.cancel_subscription(subscription_id)
        except GatewayError as e:
            logger.error(f"Gateway cancellation failed: subscription_id={subscription_id}, error={e}")
            raise _upstream(e, "Failed to cancel subscription") from e

        logger.debug(f"Cancellation response: subscription_id={subscription_id}, response={sanitize_log_data(cancelled.raw)}")
        if cancelled.status not in TERMINAL_STATUSES:
            logger.error(f"Unexpected cancellation status: subscription_id={subscription_id}, status={cancelled.status}")
            raise UpstreamError("Failed to cancel subscription properly", 500)

        user.subscription_status = config.SUBSCRIPTION_CANCELLED_STATUS
        _commit(db, user)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Subscription cancelled: user_id={user.id}, subscription_id={subscription_id}")

    refund_subscription_payment(db, user, subscription_id, gateway, now=now)
    return cancelled


def refund_subscription_payment(
    db: Session,
    user: User,
    subscription_id: str,
    gateway: PaymentGateway,
    now: Optional[datetime] = None
) -> None:
    """
    Refund the payment recorded for a cancelled subscription.

    On success the payment record is deleted and, unless the user has since
    taken out a different subscription, their subscription id and status are
    cleared, all in one commit.
    """
    try:
        payment = find_by_subscription_id(db, subscription_id)
        if not payment:
            logger.error(f"Payment record not found: subscription_id={subscription_id}")
            raise NotFoundError("Payment record not found")

        if not is_refund_eligible(payment.created_at, now):
            logger.info(f"Refund window elapsed: subscription_id={subscription_id}, paid_at={payment.created_at}")
            raise RefundPolicyError("Refund period is over, no refunds will be provided.")

        logger.info(f"Refunding payment: payment_id={payment.razorpay_payment_id}")
        try:
            refund = gateway.refund_payment(payment.razorpay_payment_id, speed=config.REFUND_SPEED)
        except GatewayError as e:
            logger.error(f"Refund failed: payment_id={payment.razorpay_payment_id}, error={e}")
            raise _upstream(e, "Failed to process refund") from e
        logger.debug(f"Refund response: {sanitize_log_data(refund or {})}")

        user = _lock_user(db, user.id)
        # The user may have subscribed again while the refund was in flight
        if user.subscription_id == subscription_id:
            user.subscription_id = None
            user.subscription_status = None
        else:
            logger.warning(
                f"Subscription replaced during refund: user_id={user.id}, "
                f"refunded={subscription_id}, current={user.subscription_id}"
            )
        delete_payment_record(db, payment)
        _commit(db, user)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Refund completed: user_id={user.id}, subscription_id={subscription_id}")
