"""
Unit tests for payment signature verification.
"""
import hashlib
import hmac

from app.services.signature_service import generate_signature, verify_signature

SECRET = "razorpay-test-secret"


def test_generate_signature_matches_hmac_sha256():
    """Signature is the hex HMAC-SHA256 of "payment_id|subscription_id"."""
    expected = hmac.new(
        SECRET.encode("utf-8"),
        b"pay_123|sub_456",
        hashlib.sha256
    ).hexdigest()
    assert generate_signature("pay_123", "sub_456", SECRET) == expected


def test_generate_signature_is_lowercase_hex():
    signature = generate_signature("pay_123", "sub_456", SECRET)
    assert len(signature) == 64
    assert signature == signature.lower()
    int(signature, 16)


def test_verify_signature_accepts_valid_signature():
    signature = generate_signature("pay_123", "sub_456", SECRET)
    assert verify_signature("pay_123", "sub_456", signature, SECRET) is True


def test_verify_signature_rejects_any_single_character_mutation():
    """Changing any one character of the signature breaks verification."""
    signature = generate_signature("pay_123", "sub_456", SECRET)
    for index, char in enumerate(signature):
        replacement = "0" if char != "0" else "1"
        mutated = signature[:index] + replacement + signature[index + 1:]
        assert verify_signature("pay_123", "sub_456", mutated, SECRET) is False


def test_verify_signature_rejects_other_subscription():
    """A signature issued for another subscription does not verify."""
    signature = generate_signature("pay_123", "sub_other", SECRET)
    assert verify_signature("pay_123", "sub_456", signature, SECRET) is False


def test_verify_signature_rejects_wrong_secret():
    signature = generate_signature("pay_123", "sub_456", "another-secret")
    assert verify_signature("pay_123", "sub_456", signature, SECRET) is False


def test_verify_signature_rejects_empty_values():
    assert verify_signature("pay_123", "sub_456", "", SECRET) is False
    assert verify_signature("pay_123", "sub_456", None, SECRET) is False
    signature = generate_signature("pay_123", "sub_456", SECRET)
    assert verify_signature("pay_123", "sub_456", signature, "") is False
