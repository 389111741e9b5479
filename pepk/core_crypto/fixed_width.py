"""
Fixed-Width Integer Codec

Converts between non-negative integers and fixed-length big-endian
byte strings:
- Leading zeros are preserved (output is always exactly `length` bytes)
- Overflow is rejected, never truncated
- Decoding always treats the top bit as magnitude, not sign

The minimal signed big-endian form of a non-negative integer may carry
one extra leading zero byte (the sign byte). That byte is dropped; any
other excess is an error.
"""

from ..errors import EncodingError


def minimal_signed_length(value: int) -> int:
    """
    Length of the minimal two's-complement big-endian form of value.

    For non-negative values this is bit_length // 8 + 1, which includes
    room for a zero sign bit.
    """
    return value.bit_length() // 8 + 1


def encode_fixed_width(value: int, length: int) -> bytes:
    """
    Encode a non-negative integer as exactly `length` big-endian bytes.

    Args:
        value: Integer to encode (must be >= 0)
        length: Output size in bytes

    Returns:
        `length` bytes, left-padded with zeros

    Raises:
        EncodingError: If value is negative or does not fit in `length` bytes
    """
    if length < 0:
        raise EncodingError(f"Length must be non-negative, got {length}")
    if value < 0:
        raise EncodingError("Value must be non-negative")

    # The signed form may be one byte longer, but only by a zero sign byte
    if value.bit_length() > length * 8:
        raise EncodingError(
            f"Integer has {value.bit_length()} magnitude bits, more than "
            f"the {length * 8} that fit in {length} bytes"
        )

    return value.to_bytes(length, "big")


def decode_unsigned(data: bytes) -> int:
    """Interpret data as a non-negative big-endian integer."""
    return int.from_bytes(data, "big", signed=False)
