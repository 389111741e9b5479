"""
Recipient Keys and Key Agreement

Handles the asymmetric half (KEM) of the hybrid scheme:
- Hex decoding of the recipient public key string
- Parsing the 68-byte public key blob: 4-byte key id || 64-byte point
- Ephemeral P-256 key generation
- ECDH against a validated recipient point
- Raw 32-byte private scalar deserialization
"""

import logging
import string
from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import ec

from ..core_crypto.fixed_width import decode_unsigned
from ..core_crypto.p256 import (
    CURVE, N, FIELD_LENGTH, POINT_LENGTH, CurvePoint, check_point, deserialize_point
)
from ..errors import (
    InvalidPublicKeyLengthError, InvalidPrivateKeyLengthError,
    OddLengthHexError, InvalidHexError, KeyAgreementError
)


logger = logging.getLogger("pepk.KeyAgreement")

KEY_ID_LENGTH = 4
PUBLIC_KEY_LENGTH = KEY_ID_LENGTH + POINT_LENGTH    # 68 bytes
SHARED_SECRET_LENGTH = FIELD_LENGTH

_HEX_DIGITS = frozenset(string.hexdigits)


def from_hex(text: str) -> bytes:
    """
    Decode a hex string, two characters per byte.

    Args:
        text: Hex string (either case, no separators)

    Returns:
        Decoded bytes

    Raises:
        OddLengthHexError: If text has an odd number of characters
        InvalidHexError: If text contains a non-hex character
    """
    if len(text) % 2 != 0:
        raise OddLengthHexError(len(text), text)
    for position, char in enumerate(text):
        if char not in _HEX_DIGITS:
            raise InvalidHexError(position, char)
    return bytes.fromhex(text)


@dataclass(frozen=True)
class RecipientPublicKey:
    """Recipient key identity plus its static P-256 point."""
    key_id: bytes
    point: CurvePoint

    @classmethod
    def from_bytes(cls, data: bytes) -> 'RecipientPublicKey':
        """Parse a 68-byte public key blob."""
        return parse_public_key(data)

    @classmethod
    def from_hex(cls, text: str) -> 'RecipientPublicKey':
        """Parse a hex-encoded public key blob."""
        return parse_public_key(from_hex(text))


def parse_public_key(data: bytes) -> RecipientPublicKey:
    """
    Split and validate a recipient public key blob.

    Args:
        data: 4-byte key id followed by a 64-byte P-256 point

    Returns:
        RecipientPublicKey with a validated point

    Raises:
        InvalidPublicKeyLengthError: If data is not 68 bytes
        PointRangeError / PointNotOnCurveError: If the point is invalid
    """
    if len(data) != PUBLIC_KEY_LENGTH:
        raise InvalidPublicKeyLengthError(PUBLIC_KEY_LENGTH, len(data))

    key_id = bytes(data[:KEY_ID_LENGTH])
    point = deserialize_point(bytes(data[KEY_ID_LENGTH:]))
    return RecipientPublicKey(key_id, point)


def generate_ephemeral_key() -> ec.EllipticCurvePrivateKey:
    """Generate a fresh P-256 key pair from the OS CSPRNG."""
    return ec.generate_private_key(CURVE)


def deserialize_private_key(data: bytes) -> ec.EllipticCurvePrivateKey:
    """
    Convert a 32-byte big-endian scalar into a P-256 private key.

    Raises:
        InvalidPrivateKeyLengthError: If data is not 32 bytes
        KeyAgreementError: If the scalar is not in [1, n)
    """
    if len(data) != FIELD_LENGTH:
        raise InvalidPrivateKeyLengthError(FIELD_LENGTH, len(data))

    scalar = decode_unsigned(data)
    if not 1 <= scalar < N:
        raise KeyAgreementError("private scalar is out of range")
    return ec.derive_private_key(scalar, CURVE)


def ecdh(private_key: ec.EllipticCurvePrivateKey, point: CurvePoint) -> bytes:
    """
    Elliptic-curve Diffie-Hellman on P-256.

    The point is re-validated before use so callers can pass points
    that were not built by deserialize_point().

    Args:
        private_key: Our private key
        point: Peer's public point

    Returns:
        32-byte shared secret (x-coordinate of private * point)

    Raises:
        KeyAgreementError: If the backend rejects the point or
            returns something other than a 32-byte secret
    """
    check_point(point)
    try:
        peer_public_key = point.to_public_key()
        shared_secret = private_key.exchange(ec.ECDH(), peer_public_key)
    except ValueError as exc:
        logger.warning("Key agreement rejected by backend: %s", exc)
        raise KeyAgreementError(f"ECDH failed: {exc}") from exc

    if len(shared_secret) != SHARED_SECRET_LENGTH:
        raise KeyAgreementError(
            f"ECDH result should be {SHARED_SECRET_LENGTH} bytes, "
            f"got {len(shared_secret)}"
        )
    return shared_secret
