"""
Arbitrary-precision integers with exact modular arithmetic.

:py:class:`BigInteger` is an immutable value object. Every operand can be a native ``int``, a
decimal or ``0x``-prefixed hexadecimal string, another :py:class:`BigInteger`, or a
:py:class:`petlib.bn.Bn`.

>>> a = BigInteger("12345")
>>> a.mod_pow(3, 1000)
BigInteger(625)
>>> (a * 2 + "0x10").to_string()
'24706'
"""

import functools
import re

import attr
from petlib.bn import Bn

from zkelgamal.exceptions import ParseError, InvalidModulus, NoInverseExists


# ASCII digits only, no underscores, no whitespace.
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")
_HEX_RE = re.compile(r"([+-]?)0[xX]([0-9a-fA-F]+)")


def _parse_string(text):
    """
    Parse a decimal or ``0x``-prefixed hexadecimal string.

    >>> _parse_string("-0x1f"), _parse_string("+12")
    (-31, 12)
    """
    if _DECIMAL_RE.fullmatch(text):
        return int(text, 10)
    match = _HEX_RE.fullmatch(text)
    if match:
        sign, digits = match.groups()
        value = int(digits, 16)
        return -value if sign == "-" else value
    raise ParseError('Cannot convert "{}" to BigInteger'.format(text))


def _parse_decimal(text):
    if not isinstance(text, str) or not _DECIMAL_RE.fullmatch(text):
        raise ParseError('Expected a decimal string, got "{}"'.format(text))
    return int(text, 10)


def _to_int(value):
    """
    Convert an operand to a native integer.

    >>> _to_int("0xff"), _to_int("-12"), _to_int(BigInteger(7))
    (255, -12, 7)
    """
    if isinstance(value, BigInteger):
        return value.value
    if isinstance(value, bool):
        raise ParseError("Cannot convert a boolean to BigInteger")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return _parse_string(value)
    if isinstance(value, Bn):
        return int(value)
    raise ParseError("Cannot convert {} to BigInteger".format(type(value).__name__))


def _require_positive_modulus(modulus):
    if modulus <= 0:
        raise InvalidModulus("Modulus must be positive, got {}".format(modulus))


def _operand(method):
    """Make a binary dunder return ``NotImplemented`` for unsupported operand types."""

    @functools.wraps(method)
    def wrapper(self, other):
        try:
            other = _to_int(other)
        except ParseError:
            return NotImplemented
        return method(self, other)

    return wrapper


@functools.total_ordering
@attr.s(frozen=True, slots=True, repr=False, eq=False, hash=False)
class BigInteger:
    """
    Exact signed integer of unbounded magnitude.

    Args:
        value: Integer, decimal/hex string, :py:class:`BigInteger` or :py:class:`petlib.bn.Bn`.

    Raises:
        :py:class:`exceptions.ParseError`: If the value cannot be interpreted as an integer.
    """

    value = attr.ib(default=0, converter=_to_int)

    @classmethod
    def from_decimal(cls, text):
        """
        Parse a decimal string, the wire format of every integer.

        Raises:
            :py:class:`exceptions.ParseError`: If ``text`` is not an optionally signed run of
                ASCII digits.
        """
        return cls(_parse_decimal(text))

    @classmethod
    def from_hex(cls, text):
        """
        Parse a hexadecimal string, with or without the ``0x`` prefix.

        >>> BigInteger.from_hex("ff")
        BigInteger(255)
        """
        sign = ""
        if text.startswith(("-", "+")):
            sign, text = text[0], text[1:]
        if not text.lower().startswith("0x"):
            text = "0x" + text
        return cls(_parse_string(sign + text))

    @classmethod
    def from_bytes(cls, data):
        """Interpret bytes (e.g. a digest) as an unsigned big-endian integer."""
        return cls(int.from_bytes(data, "big"))

    @classmethod
    def from_bn(cls, bn):
        return cls(int(bn))

    def to_bn(self):
        """Convert to a :py:class:`petlib.bn.Bn`."""
        return Bn.from_decimal(str(self.value))

    # Ring operations.

    def add(self, other):
        return BigInteger(self.value + _to_int(other))

    def subtract(self, other):
        return BigInteger(self.value - _to_int(other))

    def multiply(self, other):
        return BigInteger(self.value * _to_int(other))

    def divide(self, other):
        """Floor division."""
        return BigInteger(self.value // _to_int(other))

    def negate(self):
        return BigInteger(-self.value)

    def pow(self, exponent):
        exponent = _to_int(exponent)
        if exponent < 0:
            raise ValueError("Negative exponents are not supported, use mod_pow")
        return BigInteger(self.value ** exponent)

    # Modular operations.

    def mod(self, modulus):
        """
        Non-negative representative modulo ``modulus``.

        >>> BigInteger(-7).mod(5)
        BigInteger(3)

        Raises:
            :py:class:`exceptions.InvalidModulus`: If the modulus is not positive.
        """
        modulus = _to_int(modulus)
        _require_positive_modulus(modulus)
        return BigInteger(self.value % modulus)

    def mod_add(self, other, modulus):
        return self.add(other).mod(modulus)

    def mod_sub(self, other, modulus):
        return self.subtract(other).mod(modulus)

    def mod_mul(self, other, modulus):
        return self.multiply(other).mod(modulus)

    def mod_pow(self, exponent, modulus):
        """
        Compute ``self ** exponent mod modulus`` by square-and-multiply.

        A negative exponent inverts the base first.

        >>> BigInteger(3).mod_pow(-1, 7)
        BigInteger(5)

        Raises:
            :py:class:`exceptions.InvalidModulus`: If the modulus is not positive.
            :py:class:`exceptions.NoInverseExists`: If the exponent is negative and the base is
                not invertible.
        """
        exponent = _to_int(exponent)
        modulus = _to_int(modulus)
        _require_positive_modulus(modulus)
        if modulus == 1:
            return BigInteger(0)
        if exponent < 0:
            return self.mod_inverse(modulus).mod_pow(-exponent, modulus)

        base = self.value % modulus
        result = 1
        while exponent:
            if exponent & 1:
                result = result * base % modulus
            base = base * base % modulus
            exponent >>= 1
        return BigInteger(result)

    def mod_inverse(self, modulus):
        """
        Modular multiplicative inverse via the extended Euclidean algorithm.

        By convention the inverse modulo 1 is 0.

        >>> BigInteger(3).mod_inverse(11)
        BigInteger(4)

        Raises:
            :py:class:`exceptions.InvalidModulus`: If the modulus is not positive.
            :py:class:`exceptions.NoInverseExists`: If ``gcd(self, modulus) != 1``.
        """
        modulus = _to_int(modulus)
        _require_positive_modulus(modulus)
        if modulus == 1:
            return BigInteger(0)

        old_r, r = self.value % modulus, modulus
        old_s, s = 1, 0
        while r:
            quotient = old_r // r
            old_r, r = r, old_r - quotient * r
            old_s, s = s, old_s - quotient * s

        if old_r != 1:
            raise NoInverseExists(
                "{} has no inverse modulo {}".format(self.value, modulus)
            )
        return BigInteger(old_s % modulus)

    # Inspection.

    def bit_length(self):
        """
        Number of bits in the binary representation of the magnitude (0 for zero).

        >>> BigInteger(255).bit_length()
        8
        """
        return self.value.bit_length()

    def equals(self, other):
        return self.value == _to_int(other)

    def compare_to(self, other):
        other = _to_int(other)
        return (self.value > other) - (self.value < other)

    def to_string(self, radix=10):
        if radix == 10:
            return str(self.value)
        if radix == 16:
            return "-0x{:x}".format(-self.value) if self.value < 0 else "0x{:x}".format(self.value)
        if radix == 2:
            return format(self.value, "b")
        if radix == 8:
            return format(self.value, "o")
        raise ValueError("Unsupported radix: {}".format(radix))

    # Python protocol.

    @_operand
    def __add__(self, other):
        return BigInteger(self.value + other)

    __radd__ = __add__

    @_operand
    def __sub__(self, other):
        return BigInteger(self.value - other)

    @_operand
    def __rsub__(self, other):
        return BigInteger(other - self.value)

    @_operand
    def __mul__(self, other):
        return BigInteger(self.value * other)

    __rmul__ = __mul__

    @_operand
    def __floordiv__(self, other):
        return BigInteger(self.value // other)

    @_operand
    def __mod__(self, other):
        return self.mod(other)

    def __pow__(self, exponent, modulus=None):
        if modulus is None:
            return self.pow(exponent)
        return self.mod_pow(exponent, modulus)

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return BigInteger(abs(self.value))

    def __eq__(self, other):
        if isinstance(other, (BigInteger, Bn)) or (
            isinstance(other, int) and not isinstance(other, bool)
        ):
            return self.value == _to_int(other)
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, str):
            return NotImplemented
        try:
            other = _to_int(other)
        except ParseError:
            return NotImplemented
        return self.value < other

    def __hash__(self):
        return hash(self.value)

    def __int__(self):
        return self.value

    def __bool__(self):
        return self.value != 0

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return "BigInteger({})".format(self.value)


BigInteger.ZERO = BigInteger(0)
BigInteger.ONE = BigInteger(1)
