"""
Subscription payment endpoints.

Request handling only: every state change goes through
app.services.subscription_service.
"""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core import config
from app.core.auth_dependency import (
    get_current_user_obj,
    get_db,
    get_gateway,
    require_admin,
    require_subscriber,
)
from app.db.models.user import User
from app.schemas.billing import (
    BillingErrorResponse,
    MessageResponse,
    PaymentsReportResponse,
    RazorpayKeyResponse,
    SubscribeResponse,
    ValidationErrorResponse,
    VerifyPaymentRequest,
)
from app.services import subscription_service
from app.services.payments_report_service import DEFAULT_COUNT, DEFAULT_SKIP, get_payments_report
from app.services.razorpay_service import PaymentGateway

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/payments",
    tags=["Payments"],
    responses={
        400: {"model": BillingErrorResponse},
        401: {"model": BillingErrorResponse},
        403: {"model": BillingErrorResponse},
        404: {"model": BillingErrorResponse},
        409: {"model": BillingErrorResponse},
        422: {"model": ValidationErrorResponse},
        500: {"model": BillingErrorResponse},
        502: {"model": BillingErrorResponse},
    },
)


@router.post("/subscribe", response_model=SubscribeResponse)
def buy_subscription(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_gateway)
):
    subscription_id = subscription_service.create_subscription(db, user, gateway)
    return {
        "success": True,
        "message": "Subscribed successfully",
        "subscription_id": subscription_id,
    }


@router.post("/verify", response_model=MessageResponse)
def verify_subscription(
    payload: VerifyPaymentRequest,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    subscription_service.verify_subscription(
        db,
        user,
        payment_id=payload.razorpay_payment_id,
        signature=payload.razorpay_signature,
        subscription_id=payload.razorpay_subscription_id,
    )
    return {
        "success": True,
        "message": "Payment verified successfully",
    }


@router.post("/unsubscribe", response_model=MessageResponse)
def cancel_subscription(
    user: User = Depends(require_subscriber),
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_gateway)
):
    subscription_service.cancel_subscription(db, user, gateway)
    return {
        "success": True,
        "message": "Subscription canceled and refunded successfully",
    }


@router.get("/razorpay-key", response_model=RazorpayKeyResponse)
def get_razorpay_api_key():
    return {
        "success": True,
        "message": "Razorpay API key retrieved successfully",
        "key": config.RAZORPAY_KEY_ID,
    }


@router.get("", response_model=PaymentsReportResponse)
def all_payments(
    count: int = Query(DEFAULT_COUNT, ge=1, le=100),
    skip: int = Query(DEFAULT_SKIP, ge=0),
    admin: User = Depends(require_admin),
    gateway: PaymentGateway = Depends(get_gateway)
):
    report = get_payments_report(gateway, count=count, skip=skip)
    logger.debug(f"Payments report requested: admin_id={admin.id}, count={count}, skip={skip}")
    return {
        "success": True,
        "message": "All payments fetched successfully",
        "allPayments": report["all_payments"],
        "finalMonths": report["final_months"],
        "monthlySalesRecord": report["monthly_sales_record"],
    }
