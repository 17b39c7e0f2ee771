"""Billing error taxonomy shared by services and routes."""


class BillingError(Exception):
    """Base billing exception carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class AuthenticationError(BillingError):
    """Caller is not logged in or the token is invalid."""

    status_code = 401


class AuthorizationError(BillingError):
    """Caller's role is not allowed to perform the operation."""

    status_code = 403


class PreconditionError(BillingError):
    """Subscription is not in a state that allows the operation."""

    status_code = 400


class VerificationError(BillingError):
    """Payment signature did not match."""

    status_code = 400


class ConflictError(BillingError):
    """Duplicate payment record or concurrent modification."""

    status_code = 409


class NotFoundError(BillingError):
    status_code = 404


class RefundPolicyError(BillingError):
    """Refund window has elapsed."""

    status_code = 400


class UpstreamError(BillingError):
    """Payment gateway call failed."""

    status_code = 500
