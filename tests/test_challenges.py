from zkelgamal.base import Commitment
from zkelgamal.challenges import disjunctive_challenge, dlog_challenge, fiat_shamir_challenge
from zkelgamal.utils import sha1_to_int


def test_fiat_shamir_is_single_disjunctive():
    commitment = Commitment(123, 456)
    assert fiat_shamir_challenge(commitment) == disjunctive_challenge([commitment])
    assert fiat_shamir_challenge(commitment) == sha1_to_int("123,456")


def test_disjunctive_joins_all_commitments_in_order():
    commitments = [Commitment(1, 2), Commitment(3, 4)]
    assert disjunctive_challenge(commitments) == sha1_to_int("1,2,3,4")
    assert disjunctive_challenge(commitments) != disjunctive_challenge(commitments[::-1])


def test_dlog_challenge_hashes_decimal_string():
    assert dlog_challenge(11) == sha1_to_int("11")
    assert dlog_challenge(11) == 135455385560672318018989914913299166471400720459
