"""
HKDF-HMAC-SHA256 (RFC 5869)

Two-stage key derivation:
- Extract: PRK = HMAC-SHA256(salt, IKM)
- Expand: T(i) = HMAC-SHA256(PRK, T(i-1) || info || i), i = 1..ceil(L/32)

A missing salt is the RFC default: HashLen zero bytes. It is not random,
so callers who want a salted derivation must pass their own salt.
Output is capped at 255 expand rounds (8160 bytes).
"""

from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ..errors import InvalidLengthError, RequestedLengthTooLargeError


HASH_LENGTH = 32                        # SHA-256 digest size
MAX_ROUNDS = 255
MAX_OUTPUT_LENGTH = MAX_ROUNDS * HASH_LENGTH


def expand_rounds(length: int) -> int:
    """Number of HMAC blocks needed to produce `length` bytes."""
    return -(-length // HASH_LENGTH)


def hkdf(ikm: bytes, salt: Optional[bytes], info: bytes, length: int) -> bytes:
    """
    Derive `length` bytes of key material.

    Args:
        ikm: Input key material
        salt: Optional salt; None means HashLen zero bytes
        info: Context/application info (may be empty)
        length: Number of output bytes

    Returns:
        Derived key bytes

    Raises:
        InvalidLengthError: If length is not positive
        RequestedLengthTooLargeError: If more than 255 rounds are needed
    """
    if length < 1:
        raise InvalidLengthError(f"Output length must be positive, got {length}")
    if expand_rounds(length) > MAX_ROUNDS:
        raise RequestedLengthTooLargeError(length, MAX_OUTPUT_LENGTH)

    if salt is None:
        salt = bytes(HASH_LENGTH)

    return HKDF(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt,
        info=info,
    ).derive(ikm)
