import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RAZORPAY_KEY_ID", "rzp_test_key123")
os.environ.setdefault("RAZORPAY_SECRET", "razorpay-test-secret")
os.environ.setdefault("RAZORPAY_PLAN_ID", "plan_test123")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.models.user import User, ROLE_ADMIN, ROLE_USER
from app.services.razorpay_service import GatewaySubscription, PaymentGateway


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class FakeGateway(PaymentGateway):
    """In-memory PaymentGateway recording every call."""

    def __init__(self):
        self.created = []
        self.cancelled = []
        self.refunded = []
        self.listed = []
        self.cancel_status = "cancelled"
        self.create_error = None
        self.cancel_error = None
        self.refund_error = None
        self.list_error = None
        self.items = []
        self._counter = 0

    def create_subscription(self, plan_id, customer_notify, total_count):
        if self.create_error:
            raise self.create_error
        self._counter += 1
        self.created.append({
            "plan_id": plan_id,
            "customer_notify": customer_notify,
            "total_count": total_count,
        })
        return GatewaySubscription(id=f"sub_test{self._counter:04d}", status="created")

    def cancel_subscription(self, subscription_id):
        if self.cancel_error:
            raise self.cancel_error
        self.cancelled.append(subscription_id)
        return GatewaySubscription(id=subscription_id, status=self.cancel_status)

    def refund_payment(self, payment_id, speed):
        if self.refund_error:
            raise self.refund_error
        self.refunded.append({"payment_id": payment_id, "speed": speed})
        return {"id": f"rfnd_{payment_id}", "payment_id": payment_id, "status": "processed"}

    def list_subscriptions(self, count=10, skip=0):
        if self.list_error:
            raise self.list_error
        self.listed.append({"count": count, "skip": skip})
        page = self.items[skip:skip + count]
        return {"entity": "collection", "count": len(page), "items": page}


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def test_user(db):
    """Create a regular test user."""
    user = User(
        full_name="Test User",
        email="test@example.com",
        role=ROLE_USER,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    """Create an administrator."""
    user = User(
        full_name="Admin User",
        email="admin@example.com",
        role=ROLE_ADMIN,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
