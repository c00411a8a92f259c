"""
Group parameters :math:`(p, q, g)` and key generation.

>>> system = CryptoSystem(p=23, q=11, g=4)
>>> bool(system.validate())
True
>>> keypair = system.generate_key_pair_with_private_key(7)
>>> str(keypair.pk.y)
'8'
"""

import logging
import warnings

import attr

from zkelgamal.base import VerificationResult
from zkelgamal.bn import BigInteger
from zkelgamal.consts import (
    DEFAULT_PRIMALITY_ROUNDS,
    MIN_PARAMETER_BITS,
    RECOMMENDED_PARAMETER_BITS,
    RFC3526_MODP_2048_GENERATOR,
    RFC3526_MODP_2048_HEX,
    SUBGROUP_ORDER_BITS,
)
from zkelgamal.elgamal import KeyPair
from zkelgamal.exceptions import ParameterSearchAborted, ParameterSizeError
from zkelgamal.serialization import parse_bn
from zkelgamal.utils import ensure_bn, get_prime, is_probably_prime, random_below

logger = logging.getLogger(__name__)


@attr.s(frozen=True)
class CryptoSystem:
    """
    Shared ElGamal parameters.

    :math:`p` and :math:`q` are prime, :math:`q` divides :math:`p - 1`, and :math:`g` generates
    the subgroup of order :math:`q` of :math:`\\mathbb{Z}_p^*`.
    """

    p = attr.ib(converter=ensure_bn)
    q = attr.ib(converter=ensure_bn)
    g = attr.ib(converter=ensure_bn)

    @classmethod
    def from_json(cls, data):
        return cls(parse_bn(data, "p"), parse_bn(data, "q"), parse_bn(data, "g"))

    def to_json(self):
        return {"p": str(self.p), "q": str(self.q), "g": str(self.g)}

    @classmethod
    def from_rfc3526(cls):
        """
        The 2048-bit MODP group of RFC 3526 with :math:`q = (p - 1) / 2` and :math:`g = 4`.
        """
        p = BigInteger.from_hex(RFC3526_MODP_2048_HEX)
        return cls(p, (p - 1) // 2, RFC3526_MODP_2048_GENERATOR)

    @classmethod
    def generate_secure_parameters(
        cls,
        bits=RECOMMENDED_PARAMETER_BITS,
        q_bits=SUBGROUP_ORDER_BITS,
        rounds=DEFAULT_PRIMALITY_ROUNDS,
        should_abort=None,
    ):
        """
        Generate fresh parameters with a ``bits``-bit :math:`p` and a ``q_bits``-bit :math:`q`.

        Samples a prime :math:`q`, then searches :math:`p = 2qk + 1` of exactly ``bits`` bits
        until one is prime, then raises random elements to :math:`(p - 1) / q` until the result is
        not 1.

        Args:
            bits: Bit length of :math:`p`. At least 512, 2048 or more is recommended.
            q_bits: Bit length of :math:`q`.
            rounds: Miller-Rabin rounds for every primality test.
            should_abort: Optional callable, polled between candidates. The search stops as soon
                as it returns true (pass ``event.is_set`` to cancel from another thread).

        Raises:
            :py:class:`exceptions.ParameterSizeError`: If ``bits`` is below 512 or ``q_bits``
                does not leave room for the cofactor.
            :py:class:`exceptions.ParameterSearchAborted`: If ``should_abort`` fired.
        """
        if bits < MIN_PARAMETER_BITS:
            raise ParameterSizeError(
                "Bit length must be at least {}, got {}".format(MIN_PARAMETER_BITS, bits)
            )
        if not 2 <= q_bits <= bits - 2:
            raise ParameterSizeError(
                "Subgroup order must have between 2 and {} bits, got {}".format(bits - 2, q_bits)
            )
        if bits < RECOMMENDED_PARAMETER_BITS:
            message = "{}-bit parameters are below the recommended {} bits".format(
                bits, RECOMMENDED_PARAMETER_BITS
            )
            warnings.warn(message)
            logger.warning(message)

        q = get_prime(q_bits, rounds)
        two_q = 2 * q
        # 2^(bits-1) <= 2qk + 1 <= 2^bits - 1
        k_min = (BigInteger(1 << (bits - 1)) - 1 + two_q - 1) // two_q
        k_max = (BigInteger(1 << bits) - 2) // two_q

        tries = 0
        while True:
            if should_abort is not None and should_abort():
                logger.info("Parameter search aborted after %d candidates", tries)
                raise ParameterSearchAborted("Parameter search aborted")
            tries += 1
            k = k_min + random_below(k_max - k_min + 1)
            p = two_q * k + 1
            if is_probably_prime(p, rounds):
                break

        exponent = (p - 1) // q
        while True:
            h = random_below(p - 3) + 2
            g = h.mod_pow(exponent, p)
            if g != 1:
                break

        logger.info(
            "Generated %d-bit parameters with a %d-bit subgroup after %d candidates",
            bits,
            q_bits,
            tries,
        )
        return cls(p, q, g)

    def validate(self, rounds=DEFAULT_PRIMALITY_ROUNDS):
        """
        Check the group invariants.

        Returns:
            :py:class:`base.VerificationResult`
        """
        if not is_probably_prime(self.p, rounds):
            return VerificationResult.failure("p is not prime")
        if not is_probably_prime(self.q, rounds):
            return VerificationResult.failure("q is not prime")
        if (self.p - 1) % self.q != 0:
            return VerificationResult.failure("q does not divide p - 1")
        if not 1 < self.g < self.p:
            return VerificationResult.failure("g is not in (1, p)")
        if self.g.mod_pow(self.q, self.p) != 1:
            return VerificationResult.failure("g does not have order q")
        return VerificationResult.success()

    def generate_key_pair(self):
        return KeyPair.create(self.p, self.q, self.g)

    def generate_key_pair_with_private_key(self, x):
        return KeyPair.create_with_private_key(self.p, self.q, self.g, x)
