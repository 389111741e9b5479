"""
NIST P-256 Curve Points

Implements the point handling used by the hybrid encryption scheme:
- Curve parameters (p, a, b, G, n, h) as module constants
- CurvePoint: an affine (x, y) pair
- 64-byte point serialization: x || y, each 32-byte big-endian
- Validating deserialization: range check and curve equation check

Curve reference: FIPS 186-2, Appendix 6, Curve P-256.
Arithmetic (scalar multiplication, ECDH) is left to the `cryptography`
package; this module only checks and converts points.
"""

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import ec

from ..errors import InvalidPointLengthError, PointRangeError, PointNotOnCurveError
from .fixed_width import encode_fixed_width, decode_unsigned


# Curve P-256 (y^2 = x^3 + ax + b over GF(p))
P = 115792089210356248762697446949407573530086143415290314195533631308867097853951
N = 115792089210356248762697446949407573529996955224135760342422259061068512044369
A = P - 3
B = 0x5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b
GX = 0x6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296
GY = 0x4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5
H = 1

CURVE = ec.SECP256R1()

FIELD_LENGTH = 32                   # bytes per coordinate
POINT_LENGTH = FIELD_LENGTH * 2     # x || y


@dataclass(frozen=True)
class CurvePoint:
    """Affine point on P-256."""
    x: int
    y: int

    @classmethod
    def from_public_key(cls, public_key: ec.EllipticCurvePublicKey) -> 'CurvePoint':
        """Take the affine coordinates of a `cryptography` public key."""
        numbers = public_key.public_numbers()
        return cls(numbers.x, numbers.y)

    def to_public_key(self) -> ec.EllipticCurvePublicKey:
        """
        Build a `cryptography` public key for this point.

        Raises:
            ValueError: If the backend rejects the point
        """
        return ec.EllipticCurvePublicNumbers(self.x, self.y, CURVE).public_key()

    def __repr__(self) -> str:
        return f"CurvePoint(x={self.x:#066x}, y={self.y:#066x})"


GENERATOR = CurvePoint(GX, GY)


def is_on_curve(point: CurvePoint) -> bool:
    """
    Check y^2 == x^3 + a*x + b (mod p).

    Coordinates are assumed to already be in [0, p).
    """
    lhs = (point.y * point.y) % P
    rhs = ((point.x * point.x + A) * point.x + B) % P
    return lhs == rhs


def check_point(point: CurvePoint) -> CurvePoint:
    """
    Validate a point's coordinates and curve membership.

    Args:
        point: Candidate point

    Returns:
        The same point, if valid

    Raises:
        PointRangeError: If x or y is outside [0, p)
        PointNotOnCurveError: If the curve equation does not hold
    """
    if not 0 <= point.x < P:
        raise PointRangeError("x")
    if not 0 <= point.y < P:
        raise PointRangeError("y")
    if not is_on_curve(point):
        raise PointNotOnCurveError()
    return point


def serialize_point(point: CurvePoint) -> bytes:
    """Serialize a point as x || y, each a 32-byte big-endian integer."""
    return (
        encode_fixed_width(point.x, FIELD_LENGTH) +
        encode_fixed_width(point.y, FIELD_LENGTH)
    )


def deserialize_point(data: bytes) -> CurvePoint:
    """
    Parse and validate a 64-byte x || y point.

    Args:
        data: Serialized point

    Returns:
        Validated CurvePoint

    Raises:
        InvalidPointLengthError: If data is not 64 bytes
        PointRangeError: If a coordinate is not a field element
        PointNotOnCurveError: If the point is not on P-256
    """
    if len(data) != POINT_LENGTH:
        raise InvalidPointLengthError(POINT_LENGTH, len(data))

    x = decode_unsigned(data[:FIELD_LENGTH])
    y = decode_unsigned(data[FIELD_LENGTH:])
    return check_point(CurvePoint(x, y))
