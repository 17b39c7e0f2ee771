"""
Pydantic schemas for payment endpoints.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class VerifyPaymentRequest(BaseModel):
    """Payment confirmation returned to the client by Razorpay checkout."""
    razorpay_payment_id: str = Field(..., min_length=1, description="Razorpay payment ID")
    razorpay_subscription_id: str = Field(..., min_length=1, description="Razorpay subscription ID")
    razorpay_signature: str = Field(..., min_length=1, description="HMAC-SHA256 signature from Razorpay")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "razorpay_payment_id": "pay_29QQoUBi66xm2f",
            "razorpay_subscription_id": "sub_00000000000001",
            "razorpay_signature": "9ef4dffbfd84f1318f6739a3ce19f9d85851857ae648f114332d8401e0949a3d"
        }
    })


class MessageResponse(BaseModel):
    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human readable result")


class SubscribeResponse(MessageResponse):
    subscription_id: str = Field(..., description="Razorpay subscription ID")


class RazorpayKeyResponse(MessageResponse):
    key: Optional[str] = Field(None, description="Razorpay public key id")


class PaymentsReportResponse(MessageResponse):
    """Admin report: raw gateway page plus per-month counts."""
    allPayments: Dict[str, Any] = Field(..., description="Gateway subscription collection")
    finalMonths: Dict[str, int] = Field(..., description="Subscription count per calendar month")
    monthlySalesRecord: List[int] = Field(..., description="Twelve monthly counts, January first")


class BillingErrorResponse(MessageResponse):
    """Error response for billing operations."""

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "success": False,
            "message": "Payment not verified, please try again."
        }
    })


class ValidationErrorResponse(BillingErrorResponse):
    """Error response for a malformed request body or query."""

    detail: List[Dict[str, Any]] = []

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "success": False,
            "message": "Invalid request",
            "detail": [
                {
                    "type": "missing",
                    "loc": ["body", "razorpay_signature"],
                    "msg": "Field required",
                }
            ]
        }
    })
