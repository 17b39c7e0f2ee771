from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.security import decode_access_token
from app.db.session import SessionLocal
from app.db.models.user import User
from app.services.razorpay_service import PaymentGateway

# Tokens are issued by the account service; we only validate them
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_gateway(request: Request) -> PaymentGateway:
    """Process-wide payment gateway built at startup."""
    return request.app.state.gateway


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """Get current user email from JWT token."""
    if not token:
        raise AuthenticationError("Unauthorized, please login")

    email = decode_access_token(token)
    if email is None:
        raise AuthenticationError("Invalid token")
    return email


def get_current_user_obj(
    email: str = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> User:
    """Get current User object from JWT token."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise AuthenticationError("Unauthorized, please login")
    return user


def require_admin(user: User = Depends(get_current_user_obj)) -> User:
    if not user.is_admin:
        raise AuthorizationError("You do not have permission to access this route")
    return user


def require_subscriber(user: User = Depends(get_current_user_obj)) -> User:
    """
    Allow administrators and users holding a subscription id in any status.

    This only checks that a subscription id is stored, not that it is active.
    Users whose subscription is still created, or already inactive/cancelled,
    get through, and cancel_subscription decides what happens to them: a
    second cancel is refused with 400, and a created subscription is cancelled
    at the gateway and then fails the refund with 404 because no payment was
    recorded. Administrators get through so that cancel_subscription refuses
    them with its own 403 message.
    """
    if not user.is_admin and not user.has_subscription:
        raise AuthorizationError("Please subscribe to access this route")
    return user
