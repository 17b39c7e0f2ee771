"""
Unit tests for payment record persistence.
"""
import pytest

from app.core.exceptions import ConflictError
from app.db.models.payment import Payment
from app.services.payment_record_service import (
    create_payment_record,
    delete_payment_record,
    find_by_subscription_id,
)


def test_create_and_find_payment_record(db, test_user):
    create_payment_record(db, "pay_001", "sub_001", "sig", user_id=test_user.id)
    db.commit()

    payment = find_by_subscription_id(db, "sub_001")
    assert payment is not None
    assert payment.razorpay_payment_id == "pay_001"
    assert payment.razorpay_signature == "sig"
    assert payment.user_id == test_user.id
    assert payment.created_at is not None


def test_find_missing_record_returns_none(db):
    assert find_by_subscription_id(db, "sub_missing") is None


def test_duplicate_payment_id_conflicts(db):
    create_payment_record(db, "pay_001", "sub_001", "sig")
    db.commit()

    with pytest.raises(ConflictError) as exc_info:
        create_payment_record(db, "pay_001", "sub_002", "sig")
    assert exc_info.value.status_code == 409
    assert db.query(Payment).count() == 1


def test_duplicate_subscription_id_conflicts(db):
    """Only one payment record may exist per subscription."""
    create_payment_record(db, "pay_001", "sub_001", "sig")
    db.commit()

    with pytest.raises(ConflictError):
        create_payment_record(db, "pay_002", "sub_001", "sig")
    assert db.query(Payment).count() == 1


def test_delete_payment_record(db):
    payment = create_payment_record(db, "pay_001", "sub_001", "sig")
    db.commit()

    delete_payment_record(db, payment)
    db.commit()

    assert find_by_subscription_id(db, "sub_001") is None
