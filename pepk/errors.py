"""
Exception Hierarchy

Every failure raised by pepk derives from PepkError:

- InputValidationError: malformed caller input, detected before any
  cryptographic computation (wrong lengths, bad hex, invalid points)
- EncodingError: an integer does not fit its fixed-width field
- CryptoOperationError: the key agreement or cipher backend failed

Input validation errors are also ValueErrors so callers that only
catch ValueError keep working.
"""

from typing import Optional


class PepkError(Exception):
    """Base class for all pepk errors."""
    pass


class InputValidationError(PepkError, ValueError):
    """Raised when caller-supplied input is malformed."""
    pass


class LengthError(InputValidationError):
    """
    Raised when a buffer has the wrong length.

    Attributes:
        field: Name of the offending input
        expected: Required length in bytes
        actual: Length that was supplied
    """

    def __init__(self, field: str, expected: int, actual: int,
                 message: Optional[str] = None):
        self.field = field
        self.expected = expected
        self.actual = actual
        if message is None:
            message = f"{field} should be {expected} bytes, got {actual}"
        super().__init__(message)


class InvalidPublicKeyLengthError(LengthError):
    """Recipient public key blob is not key id + point sized."""

    def __init__(self, expected: int, actual: int):
        super().__init__("publicKey", expected, actual)


class InvalidPointLengthError(LengthError):
    """Serialized curve point is not two field elements long."""

    def __init__(self, expected: int, actual: int):
        super().__init__("point", expected, actual)


class InvalidPrivateKeyLengthError(LengthError):
    """Serialized private scalar is not one field element long."""

    def __init__(self, expected: int, actual: int):
        super().__init__("privateKey", expected, actual)


class InvalidLengthError(InputValidationError):
    """Requested output length is not positive."""
    pass


class RequestedLengthTooLargeError(InputValidationError):
    """HKDF would need more than 255 expand rounds."""

    def __init__(self, requested: int, maximum: int):
        self.requested = requested
        self.maximum = maximum
        super().__init__(
            f"extracting too many bytes at once: requested {requested}, "
            f"maximum is {maximum}"
        )


class PointRangeError(InputValidationError):
    """A point coordinate is outside [0, p)."""

    def __init__(self, coordinate: str):
        self.coordinate = coordinate
        super().__init__(f"{coordinate} is out of range")


class PointNotOnCurveError(InputValidationError):
    """Point does not satisfy the curve equation."""

    def __init__(self):
        super().__init__("point is not on the curve")


class OddLengthHexError(InputValidationError):
    """Hex string has an odd number of characters."""

    def __init__(self, length: int, text: str):
        self.length = length
        super().__init__(
            "Hex encoded byte array must have even length but instead has "
            f"length: {length}. Hex encoded string: {text}"
        )


class InvalidHexError(InputValidationError):
    """Hex string contains a non-hex character."""

    def __init__(self, position: int, char: str):
        self.position = position
        self.char = char
        super().__init__(
            f"Invalid hex character {char!r} at position {position}"
        )


class InvalidCiphertextError(InputValidationError):
    """A wire record is too short or carries an unknown version."""
    pass


class InvalidInputTypeError(InputValidationError, TypeError):
    """
    Raised when a byte-string input has some other type.

    Attributes:
        field: Name of the offending input
        actual_type: Type name that was supplied
    """

    def __init__(self, field: str, actual_type: str):
        self.field = field
        self.actual_type = actual_type
        super().__init__(
            f"{field} should be bytes, bytearray or memoryview, got {actual_type}"
        )


class EncodingError(PepkError, ValueError):
    """Integer does not fit the requested fixed width."""
    pass


class CryptoOperationError(PepkError):
    """Base class for failures inside the cryptographic backend."""
    pass


class KeyAgreementError(CryptoOperationError):
    """ECDH produced no usable shared secret."""
    pass


class EncryptionError(CryptoOperationError):
    """AES-GCM encryption failed or produced an unexpected result."""
    pass
