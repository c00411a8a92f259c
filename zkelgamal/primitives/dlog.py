r"""
Schnorr proof of knowledge of a discrete logarithm.

.. math::
    PK\{ (x): y = g^x \bmod p \}

The prover commits to :math:`t = g^w` for a random :math:`w`, receives a challenge :math:`c`
and answers :math:`s = w + x c \bmod q`. The verifier checks :math:`g^s = t y^c \bmod p`. In
the non-interactive version the challenge is :math:`H(t) \bmod q` and the verifier also
recomputes it, which binds the challenge to the transcript.

>>> from zkelgamal.challenges import dlog_challenge
>>> stmt = DLogStmt(p=23, q=11, g=4, y=pow(4, 7, 23))
>>> proof = stmt.prove(7, dlog_challenge)
>>> bool(stmt.verify(proof))
True
"""

from zkelgamal.base import DLogProof, ProofStmt, Prover, Verifier, VerificationResult
from zkelgamal.challenges import dlog_challenge
from zkelgamal.utils import ensure_bn


class DLogProver(Prover):
    def internal_commit(self, randomizer):
        return self.stmt.g.mod_pow(randomizer, self.stmt.p)


class DLogStmt(ProofStmt):
    """
    Proof statement for knowledge of :math:`x` such that :math:`y = g^x \\bmod p`.

    Args:
        p: Modulus.
        q: Order of the subgroup generated by ``g``.
        g: Generator.
        y: Public value.
    """

    prover_cls = DLogProver
    verifier_cls = Verifier

    def __init__(self, p, q, g, y):
        self.p = ensure_bn(p)
        self.q = ensure_bn(q)
        self.g = ensure_bn(g)
        self.y = ensure_bn(y)

    def build_proof(self, commitment, challenge, response):
        return DLogProof(commitment, challenge, response)

    def check_transcript(self, commitment, challenge, response):
        bad_range = self.check_ranges((challenge, response), (self.g, self.y, commitment))
        if bad_range is not None:
            return bad_range

        left_side = self.g.mod_pow(response, self.p)
        right_side = self.y.mod_pow(challenge, self.p).mod_mul(commitment, self.p)
        if left_side != right_side:
            return VerificationResult.failure("g^response != commitment * y^challenge")
        return VerificationResult.success()

    def verify(self, proof, challenge_generator=dlog_challenge):
        return super().verify(proof, challenge_generator)
