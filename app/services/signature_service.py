"""
Payment signature verification.

Razorpay signs a subscription payment with HMAC-SHA256 over
"{payment_id}|{subscription_id}" using the account's key secret.
"""
import hashlib
import hmac
from typing import Optional


def generate_signature(payment_id: str, subscription_id: str, secret: str) -> str:
    """Return the lowercase hex HMAC-SHA256 of "payment_id|subscription_id"."""
    message = f"{payment_id}|{subscription_id}"
    return hmac.new(
        secret.encode("utf-8"),
        message.encode("utf-8"),
        hashlib.sha256
    ).hexdigest()


def verify_signature(
    payment_id: str,
    subscription_id: str,
    signature: Optional[str],
    secret: str
) -> bool:
    """
    Check a client-supplied signature against the expected one.

    The subscription_id must be the one stored for the user, never one taken
    from the request, otherwise a client could replay a signature issued for
    another subscription.
    """
    if not signature or not secret:
        return False
    expected = generate_signature(payment_id, subscription_id, secret)
    return hmac.compare_digest(expected, signature)
