"""
Tests for log redaction.
"""
from app.core.logging_config import sanitize_log_data


def test_sanitize_redacts_sensitive_keys():
    data = {
        "razorpay_signature": "abc123",
        "RAZORPAY_SECRET": "s3cr3t",
        "access_token": "jwt",
        "id": "sub_1",
    }

    sanitized = sanitize_log_data(data)

    assert sanitized["razorpay_signature"] == "***REDACTED***"
    assert sanitized["RAZORPAY_SECRET"] == "***REDACTED***"
    assert sanitized["access_token"] == "***REDACTED***"
    assert sanitized["id"] == "sub_1"


def test_sanitize_leaves_input_untouched():
    data = {"signature": "abc123"}
    sanitize_log_data(data)
    assert data == {"signature": "abc123"}


def test_sanitize_empty():
    assert sanitize_log_data({}) == {}
