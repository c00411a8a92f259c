import random

import pytest

from petlib.bn import Bn

from zkelgamal.bn import BigInteger
from zkelgamal.exceptions import InvalidModulus, NoInverseExists, ParseError


P_2048 = BigInteger.from_hex(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD129024E088A67CC74020BBEA63B139B22514A08798E34"
    "04DDEF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6"
    "F406B7EDEE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3DC2007CB8A163BF0598DA48361C55D39A6916"
    "3FA8FD24CF5F83655D23DCA3AD961C62F356208552BB9ED529077096966D670C354E4ABC9804F1746C08CA18217C"
    "32905E462E36CE3BE39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9DE2BCBF6955817183995497CEA95"
    "6AE515D2261898FA051015728E5A8AACAA68FFFFFFFFFFFFFFFF"
)


def to_bn(x):
    return Bn.from_decimal(str(x))


@pytest.mark.parametrize(
    "text, expected",
    [("12345", 12345), ("-42", -42), ("+7", 7), ("0x1f", 31), ("-0x10", -16), ("0XfF", 255)],
)
def test_parse_strings(text, expected):
    assert BigInteger(text) == expected


@pytest.mark.parametrize(
    "bad",
    ["abc", "", "0xzz", "1.5", "1_000", "0x-5", "- 5", " 7", "7\n", "\u0661\u0662", "0x", "--1"],
)
def test_parse_error(bad):
    with pytest.raises(ParseError):
        BigInteger(bad)


def test_parse_rejects_other_types():
    with pytest.raises(ParseError):
        BigInteger(True)
    with pytest.raises(ParseError):
        BigInteger(1.0)


def test_from_hex_without_prefix():
    assert BigInteger.from_hex("ff") == 255
    assert BigInteger.from_hex("0xFF") == 255
    assert BigInteger.from_hex("-ff") == -255


def test_from_bytes_is_big_endian():
    assert BigInteger.from_bytes(b"\x01\x00") == 256


def test_mod_is_non_negative_and_idempotent():
    for a in [-100, -1, 0, 1, 99, 12345678901234567890]:
        r = BigInteger(a).mod(7)
        assert 0 <= r < 7
        assert r.mod(7) == r


@pytest.mark.parametrize("modulus", [0, -5])
def test_invalid_modulus(modulus):
    with pytest.raises(InvalidModulus):
        BigInteger(3).mod(modulus)
    with pytest.raises(InvalidModulus):
        BigInteger(3).mod_pow(2, modulus)
    with pytest.raises(InvalidModulus):
        BigInteger(3).mod_inverse(modulus)


def test_mod_pow_small_exponents():
    a = BigInteger(123456789)
    m = 1000003
    expected = 1
    for e in range(20):
        assert a.mod_pow(e, m) == expected % m
        expected *= 123456789


def test_mod_pow_matches_petlib():
    for _ in range(10):
        base = BigInteger(random.getrandbits(2048))
        exponent = BigInteger(random.getrandbits(2048))
        expected = to_bn(base).mod_pow(to_bn(exponent), P_2048.to_bn())
        assert base.mod_pow(exponent, P_2048) == BigInteger.from_bn(expected)


def test_mod_pow_edge_cases():
    assert BigInteger(5).mod_pow(3, 1) == 0
    assert BigInteger(0).mod_pow(0, 7) == 1
    assert BigInteger(3).mod_pow(-1, 7) == 5
    with pytest.raises(NoInverseExists):
        BigInteger(3).mod_pow(-1, 9)


def test_mod_inverse():
    for a in [1, 2, 3, 5, 12345, 2 ** 100 + 7]:
        inv = BigInteger(a).mod_inverse(P_2048)
        assert BigInteger(a).mod_mul(inv, P_2048) == 1


def test_mod_inverse_matches_petlib():
    a = BigInteger(random.getrandbits(1024))
    expected = to_bn(a).mod_inverse(P_2048.to_bn())
    assert a.mod_inverse(P_2048) == BigInteger.from_bn(expected)


def test_mod_inverse_edge_cases():
    assert BigInteger(5).mod_inverse(1) == 0
    assert BigInteger(-3).mod_inverse(11) == 7
    with pytest.raises(NoInverseExists):
        BigInteger(6).mod_inverse(9)
    with pytest.raises(NoInverseExists):
        BigInteger(0).mod_inverse(7)


def test_arithmetic_methods():
    a = BigInteger(17)
    assert a.add("3") == 20
    assert a.subtract(20) == -3
    assert a.multiply("0x2") == 34
    assert a.divide(5) == 3
    assert BigInteger(-7).divide(2) == -4
    assert a.negate() == -17
    assert a.pow(3) == 4913
    with pytest.raises(ValueError):
        a.pow(-1)


def test_modular_helpers():
    assert BigInteger(5).mod_add(8, 11) == 2
    assert BigInteger(5).mod_sub(8, 11) == 8
    assert BigInteger(5).mod_mul(8, 11) == 7


def test_operators():
    a = BigInteger(10)
    assert a + 5 == 15
    assert 5 + a == 15
    assert a - 3 == 7
    assert 3 - a == -7
    assert a * 4 == 40
    assert 4 * a == 40
    assert a // 3 == 3
    assert a % 3 == 1
    assert a ** 2 == 100
    assert pow(a, 3, 7) == 6
    assert -a == -10
    assert abs(BigInteger(-4)) == 4
    assert isinstance(a + 5, BigInteger)


def test_comparisons():
    assert BigInteger(3) < BigInteger(4)
    assert BigInteger(3) <= 3
    assert 5 > BigInteger(4)
    assert sorted([BigInteger(3), BigInteger(1), BigInteger(2)]) == [1, 2, 3]
    assert BigInteger(3).compare_to(4) == -1
    assert BigInteger(4).compare_to("4") == 0
    assert BigInteger(5).compare_to(4) == 1
    assert BigInteger(12).equals("12")


def test_equality_and_hash():
    assert BigInteger(12) == BigInteger("12")
    assert BigInteger(12) != "12"
    assert BigInteger(12) != 13
    assert hash(BigInteger(12)) == hash(BigInteger("0xc"))
    assert len({BigInteger(1), BigInteger(1), BigInteger(2)}) == 2


def test_immutable():
    a = BigInteger(1)
    with pytest.raises(AttributeError):
        a.value = 2


def test_bit_length():
    assert BigInteger(0).bit_length() == 0
    assert BigInteger(255).bit_length() == 8
    assert BigInteger(256).bit_length() == 9
    assert P_2048.bit_length() == 2048


def test_to_string():
    a = BigInteger(255)
    assert a.to_string() == "255"
    assert a.to_string(16) == "0xff"
    assert BigInteger(-255).to_string(16) == "-0xff"
    assert a.to_string(2) == "11111111"
    assert str(a) == "255"
    assert repr(a) == "BigInteger(255)"
    with pytest.raises(ValueError):
        a.to_string(7)


def test_petlib_interop():
    bn = Bn.from_decimal("98765432109876543210")
    a = BigInteger(bn)
    assert a == BigInteger("98765432109876543210")
    assert a == bn
    assert a.to_bn() == bn
    assert BigInteger.from_bn(bn) + bn == 2 * a


def test_int_and_bool():
    assert int(BigInteger("42")) == 42
    assert not BigInteger(0)
    assert BigInteger(-1)


def test_from_decimal_rejects_hex():
    assert BigInteger.from_decimal("-120") == -120
    with pytest.raises(ParseError):
        BigInteger.from_decimal("0x10")
    with pytest.raises(ParseError):
        BigInteger.from_decimal(12)


def test_from_hex_rejects_inner_sign():
    with pytest.raises(ParseError):
        BigInteger.from_hex("0x-5")
    with pytest.raises(ParseError):
        BigInteger.from_hex("1_0")
