"""
Probabilistic primality testing and prime sampling.
"""

import logging

from zkelgamal.bn import BigInteger
from zkelgamal.consts import DEFAULT_PRIMALITY_ROUNDS
from zkelgamal.utils.groups import ensure_bn, random_below

logger = logging.getLogger(__name__)

# Trial division by these cheaply discards most candidates before Miller-Rabin.
SMALL_PRIMES = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71,
    73, 79, 83, 89, 97, 101, 103, 107, 109, 113, 127, 131, 137, 139, 149, 151,
    157, 163, 167, 173, 179, 181, 191, 193, 197, 199, 211, 223, 227, 229, 233,
    239, 241, 251, 257, 263, 269, 271, 277, 281, 283, 293, 307, 311, 313, 317,
    331, 337, 347, 349, 353, 359, 367, 373, 379, 383, 389, 397, 401, 409, 419,
    421, 431, 433, 439, 443, 449, 457, 461, 463, 467, 479, 487, 491, 499, 503,
)


def is_probably_prime(n, rounds=DEFAULT_PRIMALITY_ROUNDS):
    r"""
    Miller-Rabin primality test.

    Writes :math:`n - 1 = 2^r d` with :math:`d` odd and, for each of ``rounds`` random witnesses
    :math:`a \in [2, n - 2]`, checks that :math:`a^d \equiv \pm 1` or that some of the next
    :math:`r - 1` squarings hits :math:`n - 1`. A composite passes with probability at most
    :math:`4^{-rounds}`.

    >>> is_probably_prime(2**127 - 1)
    True
    >>> is_probably_prime(561)
    False

    Args:
        n: Candidate.
        rounds: Number of independent witnesses.
    """
    n = ensure_bn(n)
    if n < 2:
        return False
    for small in SMALL_PRIMES:
        if n == small:
            return True
        if n.value % small == 0:
            return False

    d, r = n - 1, 0
    while d.value % 2 == 0:
        d = d // 2
        r += 1

    n_minus_one = n - 1
    for _ in range(rounds):
        a = random_below(n - 3) + 2
        x = a.mod_pow(d, n)
        if x == 1 or x == n_minus_one:
            continue
        for _ in range(r - 1):
            x = x.mod_mul(x, n)
            if x == n_minus_one:
                break
        else:
            return False
    return True


def get_prime(bits, rounds=DEFAULT_PRIMALITY_ROUNDS):
    """
    Sample a random prime of exactly ``bits`` bits.

    >>> get_prime(64).bit_length()
    64
    """
    if bits < 2:
        raise ValueError("Primes need at least 2 bits")
    top = BigInteger(1 << (bits - 1))
    tries = 0
    while True:
        tries += 1
        candidate = BigInteger((random_below(top) + top).value | 1)
        if candidate.bit_length() == bits and is_probably_prime(candidate, rounds):
            logger.debug("Found a %d-bit prime after %d candidates", bits, tries)
            return candidate
