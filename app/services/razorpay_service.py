"""
Razorpay gateway adapter.

The state machine talks to the gateway through the PaymentGateway interface;
RazorpayGateway is the production implementation backed by the razorpay SDK.
One instance is built at startup and injected into routes (see app.main).
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import razorpay
import requests
from razorpay.errors import BadRequestError, GatewayError as RazorpayGatewayError, ServerError

from app.core.config import RAZORPAY_KEY_ID, RAZORPAY_SECRET

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewaySubscription:
    """Read-only snapshot of a gateway subscription."""
    id: str
    status: str
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "GatewaySubscription":
        return cls(id=data.get("id"), status=data.get("status"), raw=dict(data))


class GatewayError(Exception):
    """
    Failure reported by the payment gateway.

    Carries the gateway's human readable description (may be None) and the
    HTTP status to surface to the caller.
    """

    def __init__(self, description: Optional[str] = None, status_code: int = 500):
        super().__init__(description or "Payment gateway error")
        self.description = description
        self.status_code = status_code


class PaymentGateway(ABC):
    """Operations the billing service consumes from the payment gateway."""

    @abstractmethod
    def create_subscription(
        self,
        plan_id: str,
        customer_notify: int,
        total_count: int
    ) -> GatewaySubscription:
        pass

    @abstractmethod
    def cancel_subscription(self, subscription_id: str) -> GatewaySubscription:
        pass

    @abstractmethod
    def refund_payment(self, payment_id: str, speed: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def list_subscriptions(self, count: int = 10, skip: int = 0) -> Dict[str, Any]:
        """Return the gateway collection payload ({"items": [...], ...})."""
        pass


class RazorpayGateway(PaymentGateway):
    """PaymentGateway backed by razorpay.Client."""

    def __init__(self, key_id: str, key_secret: str, client: Optional[razorpay.Client] = None):
        self.key_id = key_id
        self.client = client or razorpay.Client(auth=(key_id, key_secret))

    def _call(self, operation: str, fn, *args, **kwargs) -> Dict[str, Any]:
        try:
            return fn(*args, **kwargs)
        except BadRequestError as e:
            logger.warning(f"Razorpay rejected {operation}: {e}")
            raise GatewayError(str(e) or None, 400) from e
        except RazorpayGatewayError as e:
            logger.error(f"Razorpay gateway failure during {operation}: {e}")
            raise GatewayError(str(e) or None, 502) from e
        except ServerError as e:
            logger.error(f"Razorpay server error during {operation}: {e}")
            raise GatewayError(str(e) or None, 500) from e
        except requests.RequestException as e:
            logger.error(f"Failed to contact Razorpay during {operation}: {e}")
            raise GatewayError(f"Failed to contact Razorpay: {e}", 502) from e

    def create_subscription(self, plan_id, customer_notify, total_count):
        data = self._call(
            "subscription.create",
            self.client.subscription.create,
            data={
                "plan_id": plan_id,
                "customer_notify": customer_notify,
                "total_count": total_count,
            },
        )
        return GatewaySubscription.from_response(data)

    def cancel_subscription(self, subscription_id):
        data = self._call("subscription.cancel", self.client.subscription.cancel, subscription_id)
        return GatewaySubscription.from_response(data)

    def refund_payment(self, payment_id, speed):
        return self._call("payment.refund", self.client.payment.refund, payment_id, {"speed": speed})

    def list_subscriptions(self, count=10, skip=0):
        return self._call(
            "subscription.all",
            self.client.subscription.all,
            data={"count": count, "skip": skip},
        )


def build_gateway() -> RazorpayGateway:
    """Construct the process-wide gateway from environment configuration."""
    if not RAZORPAY_KEY_ID or not RAZORPAY_SECRET:
        logger.warning("RAZORPAY_KEY_ID / RAZORPAY_SECRET not configured - gateway calls will fail")
    return RazorpayGateway(RAZORPAY_KEY_ID or "", RAZORPAY_SECRET or "")
