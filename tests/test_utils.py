import random

import pytest

from petlib.bn import Bn

from zkelgamal.bn import BigInteger
from zkelgamal.utils import (
    ensure_bn,
    fingerprint,
    format_fingerprint,
    get_prime,
    get_random_num,
    is_probably_prime,
    random_below,
    sha1_fingerprint,
    sha1_hex,
    sha1_to_int,
    sum_bn_array,
)


@pytest.mark.parametrize("n", [2, 3, 5, 503, 509, 7919, 2 ** 61 - 1, 2 ** 127 - 1, 2 ** 521 - 1])
def test_primes_are_detected(n):
    assert is_probably_prime(n)


@pytest.mark.parametrize(
    "n", [-7, 0, 1, 4, 561, 1105, 8911, 509 * 521, 2 ** 67 - 1, 2 ** 128 + 1, (2 ** 89 - 1) ** 2]
)
def test_composites_are_rejected(n):
    assert not is_probably_prime(n)


def test_primality_matches_petlib():
    for _ in range(50):
        n = random.getrandbits(128) | 1
        assert is_probably_prime(n) == Bn.from_decimal(str(n)).is_prime()


def test_rfc3526_prime(system):
    assert is_probably_prime(system.p)
    assert is_probably_prime(system.q)


@pytest.mark.parametrize("bits", [2, 16, 64, 256])
def test_get_prime(bits):
    p = get_prime(bits)
    assert p.bit_length() == bits
    assert is_probably_prime(p)


def test_get_prime_needs_two_bits():
    with pytest.raises(ValueError):
        get_prime(1)


def test_random_below_range():
    for bound in [1, 2, 3, 255, 256, 257, 2 ** 64 + 13]:
        for _ in range(20):
            x = random_below(bound)
            assert isinstance(x, BigInteger)
            assert 0 <= x < bound


def test_random_below_covers_small_range():
    seen = {int(random_below(5)) for _ in range(300)}
    assert seen == {0, 1, 2, 3, 4}


@pytest.mark.parametrize("bound", [0, -3])
def test_random_below_rejects_non_positive_bound(bound):
    with pytest.raises(ValueError):
        random_below(bound)


def test_get_random_num():
    for _ in range(20):
        assert get_random_num(6) < 64


def test_sum_bn_array():
    assert sum_bn_array([5, 7, 9], 10) == 1
    assert sum_bn_array([], 10) == 0


def test_ensure_bn():
    x = BigInteger(3)
    assert ensure_bn(x) is x
    assert ensure_bn("0x2a") == 42


def test_sha1_to_int_hello():
    assert sha1_to_int("hello") == BigInteger("975987071262755080377722350727279193143145743181")


def test_sha1_hex():
    assert sha1_hex("11") == "17ba0791499db908433b80f37c5fbc89b870084b"
    assert sha1_to_int("11") == BigInteger("135455385560672318018989914913299166471400720459")


def test_sha1_fingerprint():
    assert sha1_fingerprint("hello") == "AA:F4:C6:1D:DC:C5:E8:A2:DA:BE:DE:0F:3B:48:2C:D9:AE:A9:43:4D"


def test_format_fingerprint_truncates():
    assert format_fingerprint(bytes(range(32))).count(":") == 19
    assert format_fingerprint(b"\x00\xff", length=1) == "00"


def test_fingerprint_concatenates_decimal_strings():
    assert fingerprint(1, 23) == fingerprint("12", 3)
    assert fingerprint(1, 23) != fingerprint(1, 24)
