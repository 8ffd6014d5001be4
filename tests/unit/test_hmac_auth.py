"""Unit tests for streak_quest.auth.hmac_auth.verify_request_signature."""
import hashlib
import hmac
import time

from streak_quest.auth.hmac_auth import (
    TIMESTAMP_TOLERANCE_SECONDS,
    sign_request,
    verify_request_signature,
)


SECRET = "test-secret"
ADDRESS = "0x" + "ab" * 20


def _valid_args(
    secret: str = SECRET,
    address: str = ADDRESS,
    offset: int = 0,
) -> tuple[str, str, str, str, str]:
    """Return (secret, address, timestamp, nonce, signature) for a fresh request."""
    ts = str(int(time.time()) + offset)
    nonce = "test-nonce-uuid4"
    return secret, address, ts, nonce, sign_request(secret, address, ts, nonce)


def test_signature_format():
    message = f"100:n:{ADDRESS}".encode()
    expected = hmac.new(SECRET.encode(), message, hashlib.sha256).hexdigest()
    assert sign_request(SECRET, ADDRESS.upper().replace("0X", "0x"), "100", "n") == expected


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


def test_valid_signature_accepted():
    assert verify_request_signature(*_valid_args()) is True


def test_address_case_does_not_matter():
    secret, address, ts, nonce, sig = _valid_args()
    assert verify_request_signature(secret, address.upper(), ts, nonce, sig) is True


def test_valid_signature_inside_tolerance():
    assert verify_request_signature(*_valid_args(offset=TIMESTAMP_TOLERANCE_SECONDS - 1)) is True
    assert verify_request_signature(*_valid_args(offset=-(TIMESTAMP_TOLERANCE_SECONDS - 1))) is True


# ---------------------------------------------------------------------------
# Replay / expiry
# ---------------------------------------------------------------------------


def test_expired_timestamp_rejected():
    args = _valid_args(offset=-(TIMESTAMP_TOLERANCE_SECONDS + 1))
    assert verify_request_signature(*args) is False


def test_future_timestamp_beyond_tolerance_rejected():
    args = _valid_args(offset=TIMESTAMP_TOLERANCE_SECONDS + 1)
    assert verify_request_signature(*args) is False


# ---------------------------------------------------------------------------
# Wrong credentials / malformed input
# ---------------------------------------------------------------------------


def test_wrong_secret_rejected():
    _, address, ts, nonce, sig = _valid_args()
    assert verify_request_signature("wrong-secret", address, ts, nonce, sig) is False


def test_signature_for_other_address_rejected():
    secret, _, ts, nonce, sig = _valid_args()
    assert verify_request_signature(secret, "0x" + "cd" * 20, ts, nonce, sig) is False


def test_missing_fields_rejected():
    secret, address, ts, nonce, sig = _valid_args()
    assert verify_request_signature(secret, address, None, nonce, sig) is False
    assert verify_request_signature(secret, address, ts, "", sig) is False
    assert verify_request_signature(secret, address, ts, nonce, None) is False


def test_non_numeric_timestamp_rejected():
    secret, address, _, nonce, sig = _valid_args()
    assert verify_request_signature(secret, address, "yesterday", nonce, sig) is False
