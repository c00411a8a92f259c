import pytest

from zkelgamal.exceptions import MessageEncodingError
from zkelgamal.plaintext import Plaintext, decode_message, encode_message


def test_plaintext_equality():
    assert Plaintext(5) == Plaintext.from_int(5)
    assert Plaintext("5") == Plaintext(5)
    assert Plaintext(5) != Plaintext(6)
    assert str(Plaintext(5)) == "5"


def test_from_string_hashes():
    plaintext = Plaintext.from_string("hello")
    assert plaintext.m == 975987071262755080377722350727279193143145743181
    assert plaintext.compare_to_string("hello")
    assert not plaintext.compare_to_string("hello!")


def test_from_strings():
    plaintexts = Plaintext.from_strings(["yes", "no"])
    assert [p.compare_to_string(s) for p, s in zip(plaintexts, ["yes", "no"])] == [True, True]


def test_encoding_round_trip_toy_group(toy_system):
    p, q = toy_system.p, toy_system.q
    encoded = set()
    for m in range(int(q)):
        e = encode_message(m, p, q)
        # The result lives in the subgroup of order q.
        assert e.mod_pow(q, p) == 1
        assert decode_message(e, p, q) == m
        encoded.add(e)
    assert len(encoded) == int(q)


def test_encoding_round_trip_large_group(system):
    for m in [0, 1, 2, 12345, system.q - 1]:
        e = encode_message(m, system.p, system.q)
        assert e.mod_pow(system.q, system.p) == 1
        assert decode_message(e, system.p, system.q) == m


@pytest.mark.parametrize("m", [-1, 11, 100])
def test_encoding_out_of_range(toy_system, m):
    with pytest.raises(MessageEncodingError):
        encode_message(m, toy_system.p, toy_system.q)


def test_encoding_needs_safe_prime():
    # 67 = 6 * 11 + 1 has a subgroup of order 11, but is not a safe prime.
    with pytest.raises(MessageEncodingError):
        encode_message(3, 67, 11)
    with pytest.raises(MessageEncodingError):
        decode_message(3, 67, 11)
