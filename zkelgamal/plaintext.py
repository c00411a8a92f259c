"""
Plaintexts and their encoding into the prime-order subgroup.
"""

import attr

from zkelgamal.exceptions import MessageEncodingError
from zkelgamal.utils import ensure_bn, sha1_to_int


@attr.s(frozen=True)
class Plaintext:
    """
    A message, represented as an integer :math:`m`.

    >>> Plaintext.from_int(12345) == Plaintext(12345)
    True
    >>> Plaintext.from_string("hello").compare_to_string("hello")
    True
    """

    m = attr.ib(converter=ensure_bn)

    @classmethod
    def from_int(cls, m):
        return cls(m)

    @classmethod
    def from_string(cls, text):
        """Hash a string (SHA-1, big-endian) into a plaintext."""
        return cls(sha1_to_int(text))

    @classmethod
    def from_strings(cls, texts):
        return [cls.from_string(text) for text in texts]

    def compare_to_string(self, text):
        return self.m == sha1_to_int(text)

    def __str__(self):
        return str(self.m)


def _require_safe_prime_group(p, q):
    if p != 2 * q + 1:
        raise MessageEncodingError(
            "Subgroup encoding needs a safe-prime group with p = 2q + 1"
        )


def encode_message(m, p, q):
    r"""
    Map :math:`m \in [0, q)` into the subgroup of quadratic residues modulo :math:`p`.

    Computes :math:`y = m + 1` and keeps it if :math:`y^q \equiv 1`, otherwise uses
    :math:`-y \bmod p`. Since :math:`-1` is a non-residue modulo a safe prime, exactly one of the
    two is a residue.

    >>> encode_message(0, 23, 11), encode_message(4, 23, 11)
    (BigInteger(1), BigInteger(18))

    Raises:
        :py:class:`exceptions.MessageEncodingError`: If :math:`p \neq 2q + 1` or :math:`m` is
            out of range.
    """
    m, p, q = ensure_bn(m), ensure_bn(p), ensure_bn(q)
    _require_safe_prime_group(p, q)
    if not 0 <= m < q:
        raise MessageEncodingError("Message must be in [0, q) to be encoded")

    y = m + 1
    if y.mod_pow(q, p) == 1:
        return y
    return y.negate().mod(p)


def decode_message(encoded, p, q):
    """
    Inverse of :py:func:`encode_message`.

    Encoded values in :math:`[1, q]` are :math:`m + 1` itself, values in :math:`[q + 1, p - 1]`
    are its negation.

    >>> decode_message(encode_message(4, 23, 11), 23, 11)
    BigInteger(4)
    """
    encoded, p, q = ensure_bn(encoded), ensure_bn(p), ensure_bn(q)
    _require_safe_prime_group(p, q)
    if encoded <= q:
        y = encoded
    else:
        y = encoded.negate().mod(p)
    return y - 1
