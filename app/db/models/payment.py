from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from app.db.base import Base


class Payment(Base):
    """
    Verified payment for a gateway subscription.

    Created together with the subscription's transition to active, read during
    cancellation for the refund window, deleted once the refund succeeds.
    """
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    razorpay_payment_id = Column(String, nullable=False, unique=True, index=True)
    razorpay_subscription_id = Column(String, nullable=False, unique=True, index=True)
    razorpay_signature = Column(String, nullable=False)  # kept for audit
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
