"""
Fiat-Shamir challenge generators.

A challenge generator maps the prover's commitment(s) to a challenge integer by hashing their
decimal representations, which makes a Sigma protocol non-interactive. Generators return the raw
digest integer; provers and verifiers reduce it modulo the group order.

>>> from zkelgamal.base import Commitment
>>> fiat_shamir_challenge(Commitment(1, 2)) == disjunctive_challenge([Commitment(1, 2)])
True
"""

from zkelgamal.utils.hashing import sha1_to_int


def disjunctive_challenge(commitments):
    """
    Hash a list of commitments, in order, into a single challenge.

    The hashed string is ``"A_0,B_0,A_1,B_1,..."`` with every element in decimal.

    Args:
        commitments: :py:class:`base.Commitment` objects.
    """
    parts = []
    for commitment in commitments:
        parts.append(str(commitment.A))
        parts.append(str(commitment.B))
    return sha1_to_int(",".join(parts))


def fiat_shamir_challenge(commitment):
    """Challenge for a single Chaum-Pedersen commitment."""
    return disjunctive_challenge([commitment])


def dlog_challenge(commitment):
    """Challenge for a Schnorr commitment (a single group element)."""
    return sha1_to_int(str(commitment))
