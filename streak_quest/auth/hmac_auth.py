"""HMAC-SHA256 request signature verification for player addresses.

Message format:  "{timestamp}:{nonce}:{address}"
Headers expected:
  X-Request-Timestamp  – unix epoch seconds (str)
  X-Nonce              – uuid4 string
  X-Signature          – HMAC-SHA256 hex digest

Replay protection: ±300 s timestamp window (stateless, no nonce DB).
"""
import hashlib
import hmac
import time
from typing import Optional


TIMESTAMP_TOLERANCE_SECONDS = 300


def sign_request(secret: str, address: str, timestamp: str, nonce: str) -> str:
    message = f"{timestamp}:{nonce}:{address.lower()}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


def verify_request_signature(
    secret: str,
    address: str,
    timestamp: Optional[str],
    nonce: Optional[str],
    signature: Optional[str],
) -> bool:
    """Return True if the signature is valid and the timestamp is fresh.

    Returns False (rather than raising) so the caller can return a 401.
    Addresses are compared case-insensitively.
    """
    if not all([timestamp, nonce, signature]):
        return False

    try:
        ts = int(timestamp)  # type: ignore[arg-type]
    except (ValueError, TypeError):
        return False

    now = int(time.time())
    if abs(now - ts) > TIMESTAMP_TOLERANCE_SECONDS:
        return False

    expected = sign_request(secret, address, timestamp, nonce)  # type: ignore[arg-type]
    return hmac.compare_digest(expected, signature)  # type: ignore[arg-type]
