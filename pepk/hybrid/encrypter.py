"""
Hybrid Encryption Module

Implements the P-256 / HKDF / AES-GCM hybrid encryption used to export a
private key to the holder of a recipient key:
- KEM: ephemeral ECDH (P-256) against the recipient's static point
- KDF: HKDF-HMAC-SHA256, info "GOOGLE_KEYMASTER", no salt
- DEM: AES-GCM with a 16-byte key and a 16-byte tag, no associated data

Ciphertext Format:
    [version (1) | key id (4) | ephemeral point (64) | nonce (12) | ciphertext | tag (16)]

Security notes:
- One ephemeral exchange per HybridEncrypter; every encrypt() call draws
  a fresh 96-bit random nonce under the same derived key
- The recipient point is validated before any key agreement
- The DEM key is 16 bytes (AES-128-GCM) even though the key type is named
  after AES-256; changing it would break existing decrypters
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Union

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..core_crypto.hkdf import hkdf
from ..core_crypto.p256 import POINT_LENGTH, CurvePoint, serialize_point
from ..errors import EncryptionError, InvalidCiphertextError, InvalidInputTypeError
from .keys import (
    KEY_ID_LENGTH,
    RecipientPublicKey, parse_public_key, generate_ephemeral_key, ecdh, from_hex
)


logger = logging.getLogger("pepk.HybridEncrypter")

# Constants
VERSION = 0x00
DEM_KEY_LENGTH = 16         # AES-128-GCM, kept for wire compatibility
NONCE_LENGTH = 12           # 96-bit GCM nonce
TAG_LENGTH = 16             # 128-bit GCM tag
HKDF_INFO = b"GOOGLE_KEYMASTER"

HEADER_LENGTH = (
    1 +                 # Version
    KEY_ID_LENGTH +     # Key identity
    POINT_LENGTH +      # Ephemeral point (KEM token)
    NONCE_LENGTH        # Nonce
)  # Total: 81 bytes
CIPHERTEXT_OVERHEAD = HEADER_LENGTH + TAG_LENGTH  # 97 bytes


@dataclass
class HybridCiphertext:
    """One encrypted record in wire order."""
    version: int
    key_id: bytes
    ephemeral_point: bytes
    nonce: bytes
    ciphertext: bytes      # AES-GCM output, tag included

    @property
    def tag(self) -> bytes:
        """The trailing GCM authentication tag."""
        return self.ciphertext[-TAG_LENGTH:]

    @property
    def payload_length(self) -> int:
        """Length of the plaintext this record encrypts."""
        return len(self.ciphertext) - TAG_LENGTH

    def to_bytes(self) -> bytes:
        """Serialize to the wire format."""
        return (
            bytes([self.version]) +
            self.key_id +
            self.ephemeral_point +
            self.nonce +
            self.ciphertext
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> 'HybridCiphertext':
        """
        Split a wire record into its fields.

        Raises:
            InvalidCiphertextError: If data is shorter than the fixed
                overhead or the version byte is unknown
        """
        if len(data) < CIPHERTEXT_OVERHEAD:
            raise InvalidCiphertextError(
                f"ciphertext should be at least {CIPHERTEXT_OVERHEAD} bytes, "
                f"got {len(data)}"
            )
        if data[0] != VERSION:
            raise InvalidCiphertextError(f"Unsupported version {data[0]}")

        offset = 1
        key_id = data[offset:offset + KEY_ID_LENGTH]
        offset += KEY_ID_LENGTH

        ephemeral_point = data[offset:offset + POINT_LENGTH]
        offset += POINT_LENGTH

        nonce = data[offset:offset + NONCE_LENGTH]
        offset += NONCE_LENGTH

        return cls(
            version=data[0],
            key_id=bytes(key_id),
            ephemeral_point=bytes(ephemeral_point),
            nonce=bytes(nonce),
            ciphertext=bytes(data[offset:]),
        )


def generate_nonce() -> bytes:
    """
    Generate a random nonce for AES-GCM.

    Never reuse a nonce with the same key.
    """
    return secrets.token_bytes(NONCE_LENGTH)


def dem_encrypt(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """
    Encrypt with AES-GCM, no associated data.

    Args:
        key: 16-byte AES key
        nonce: 12-byte nonce, unique per key
        plaintext: Data to encrypt

    Returns:
        Ciphertext followed by the 16-byte tag

    Raises:
        EncryptionError: On bad key/nonce sizes or an unexpected cipher result
    """
    if len(key) != DEM_KEY_LENGTH:
        raise EncryptionError(
            f"DEM key should be {DEM_KEY_LENGTH} bytes, got {len(key)}"
        )
    if len(nonce) != NONCE_LENGTH:
        raise EncryptionError(
            f"nonce should be {NONCE_LENGTH} bytes, got {len(nonce)}"
        )

    try:
        ciphertext = AESGCM(key).encrypt(nonce, plaintext, None)
    except (ValueError, OverflowError) as exc:
        raise EncryptionError(f"AES-GCM encryption failed: {exc}") from exc

    if len(ciphertext) != len(plaintext) + TAG_LENGTH:
        raise EncryptionError("Length mismatch")
    return ciphertext


class HybridEncrypter:
    """
    Hybrid encryption session for one recipient public key.

    Key agreement and key derivation run once, in the constructor.
    The instance is read-only afterwards and encrypt() may be called
    from several threads at once.

    Example:
        >>> encrypter = HybridEncrypter.from_hex(public_key_hex)
        >>> record = encrypter.encrypt(private_key_pem)
    """

    def __init__(self, public_key: bytes,
                 ephemeral_key: Optional[ec.EllipticCurvePrivateKey] = None):
        """
        Set up a session from a serialized recipient key.

        Args:
            public_key: 4-byte key identity followed by a 64-byte P-256 point
            ephemeral_key: Ephemeral key pair to use; a fresh one is
                generated if None

        Raises:
            InvalidPublicKeyLengthError: If public_key is not 68 bytes
            PointRangeError / PointNotOnCurveError: If the point is invalid
            KeyAgreementError: If ECDH fails
        """
        recipient = parse_public_key(public_key)
        self._key_id = recipient.key_id

        ephemeral = ephemeral_key or generate_ephemeral_key()
        self._ephemeral_public_key = ephemeral.public_key()
        self._kem_token = serialize_point(
            CurvePoint.from_public_key(self._ephemeral_public_key)
        )

        shared_secret = ecdh(ephemeral, recipient.point)
        self._dem_key = hkdf(
            self._kem_token + shared_secret,
            None,
            HKDF_INFO,
            DEM_KEY_LENGTH,
        )

        logger.debug("Hybrid encryption session ready for key id %s",
                     self._key_id.hex())

    @classmethod
    def from_hex(cls, public_key_hex: str) -> 'HybridEncrypter':
        """Create a session from a hex-encoded public key."""
        return cls(from_hex(public_key_hex))

    @classmethod
    def for_recipient(cls, recipient: RecipientPublicKey,
                      ephemeral_key: Optional[ec.EllipticCurvePrivateKey] = None
                      ) -> 'HybridEncrypter':
        """Create a session from an already parsed recipient key."""
        return cls(recipient.key_id + serialize_point(recipient.point),
                   ephemeral_key)

    @property
    def key_id(self) -> bytes:
        """Recipient key identity (4 bytes)."""
        return self._key_id

    @property
    def kem_token(self) -> bytes:
        """Serialized ephemeral public point (64 bytes)."""
        return self._kem_token

    @property
    def ephemeral_public_key(self) -> ec.EllipticCurvePublicKey:
        """Ephemeral public key sent with every record."""
        return self._ephemeral_public_key

    def encrypt_record(self, plaintext: bytes) -> HybridCiphertext:
        """Encrypt plaintext and return the unserialized record."""
        if not isinstance(plaintext, (bytes, bytearray, memoryview)):
            raise InvalidInputTypeError("plaintext", type(plaintext).__name__)

        nonce = generate_nonce()
        return HybridCiphertext(
            version=VERSION,
            key_id=self._key_id,
            ephemeral_point=self._kem_token,
            nonce=nonce,
            ciphertext=dem_encrypt(self._dem_key, nonce, bytes(plaintext)),
        )

    def encrypt(self, plaintext: bytes) -> bytes:
        """
        Encrypt plaintext into a wire record.

        Args:
            plaintext: Data to encrypt (contents are not interpreted)

        Returns:
            97 + len(plaintext) bytes: version, key id, ephemeral point,
            nonce, ciphertext and tag

        Raises:
            InvalidInputTypeError: If plaintext is not a byte string
            EncryptionError: If the cipher fails
        """
        record = self.encrypt_record(plaintext)
        data = record.to_bytes()
        logger.debug("Encrypted %d bytes into %d byte record",
                     record.payload_length, len(data))
        return data

    def __repr__(self) -> str:
        return f"HybridEncrypter(key_id={self._key_id.hex()})"


def encrypt_private_key(public_key: Union[str, bytes], plaintext: bytes) -> bytes:
    """
    One-shot encryption of a private key blob.

    Args:
        public_key: Recipient key as hex string or 68 raw bytes
        plaintext: Data to encrypt (typically a PEM private key)

    Returns:
        Wire record bytes
    """
    if isinstance(public_key, str):
        public_key = from_hex(public_key)
    return HybridEncrypter(public_key).encrypt(plaintext)


def get_ciphertext_info(data: bytes) -> dict:
    """
    Describe a wire record without decrypting it.

    Args:
        data: Record produced by HybridEncrypter.encrypt()

    Returns:
        Dict with record metadata
    """
    record = HybridCiphertext.from_bytes(data)
    return {
        'version': record.version,
        'key_id': record.key_id.hex(),
        'ephemeral_point': record.ephemeral_point.hex(),
        'nonce': record.nonce.hex(),
        'payload_length': record.payload_length,
        'total_length': len(data),
    }
