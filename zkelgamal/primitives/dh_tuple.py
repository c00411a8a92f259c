r"""
Chaum-Pedersen proof of equality of two discrete logarithms.

.. math::
    PK\{ (x): G = g^x \land H = h^x \}

This is the building block of both ElGamal proofs:

- encryption proof: :math:`(g, y, \alpha, \beta / m)` with the encryption randomness :math:`r`
  as witness,
- decryption proof: :math:`(g, \alpha, y, \beta / m)` with the secret key :math:`x` as witness.

See "`Wallet Databases with Observers`_" by Chaum and Pedersen, 1992.

.. _`Wallet Databases with Observers`:
    https://link.springer.com/chapter/10.1007/3-540-48071-4_7
"""

from zkelgamal.base import Commitment, ZKProof, ProofStmt, Prover, Verifier, VerificationResult
from zkelgamal.utils import ensure_bn, random_below


class DHTupleProver(Prover):
    def internal_commit(self, randomizer):
        return Commitment(
            self.stmt.little_g.mod_pow(randomizer, self.stmt.p),
            self.stmt.little_h.mod_pow(randomizer, self.stmt.p),
        )


class DHTupleStmt(ProofStmt):
    """
    Proof statement that :math:`(g, h, G, H)` is a Diffie-Hellman tuple.

    Args:
        p: Modulus.
        q: Order of the subgroup.
        little_g: First base :math:`g`.
        little_h: Second base :math:`h`.
        big_g: :math:`G = g^x`.
        big_h: :math:`H = h^x`.
        names: Names of the four elements, used in verification diagnostics.
    """

    prover_cls = DHTupleProver
    verifier_cls = Verifier

    def __init__(self, p, q, little_g, little_h, big_g, big_h, names=("g", "h", "G", "H")):
        self.p = ensure_bn(p)
        self.q = ensure_bn(q)
        self.little_g = ensure_bn(little_g)
        self.little_h = ensure_bn(little_h)
        self.big_g = ensure_bn(big_g)
        self.big_h = ensure_bn(big_h)
        self.names = names

    def build_proof(self, commitment, challenge, response):
        return ZKProof(commitment, challenge, response)

    def check_transcript(self, commitment, challenge, response):
        g_name, h_name, big_g_name, big_h_name = self.names

        bad_range = self.check_ranges(
            (challenge, response),
            (self.little_g, self.little_h, self.big_g, self.big_h, commitment.A, commitment.B),
        )
        if bad_range is not None:
            return bad_range

        # g^response = A * G^challenge
        left_side = self.little_g.mod_pow(response, self.p)
        right_side = self.big_g.mod_pow(challenge, self.p).mod_mul(commitment.A, self.p)
        if left_side != right_side:
            return VerificationResult.failure(
                "{}^response != A * {}^challenge".format(g_name, big_g_name)
            )

        # h^response = B * H^challenge
        left_side = self.little_h.mod_pow(response, self.p)
        right_side = self.big_h.mod_pow(challenge, self.p).mod_mul(commitment.B, self.p)
        if left_side != right_side:
            return VerificationResult.failure(
                "{}^response != B * {}^challenge".format(h_name, big_h_name)
            )

        return VerificationResult.success()

    def simulate(self, challenge=None):
        """
        Produce an accepting transcript without knowing the witness.

        The challenge (unless given) and the response are drawn independently at random, and the
        commitment is solved from the verification equations:
        :math:`A = g^s G^{-c}`, :math:`B = h^s H^{-c}`. The result is distributed exactly like an
        honest transcript with the same challenge.

        Args:
            challenge: Optional challenge to simulate for.
        """
        if challenge is None:
            challenge = random_below(self.q)
        challenge = ensure_bn(challenge)
        response = random_below(self.q)

        c_a = (
            self.big_g.mod_pow(challenge, self.p)
            .mod_inverse(self.p)
            .mod_mul(self.little_g.mod_pow(response, self.p), self.p)
        )
        c_b = (
            self.big_h.mod_pow(challenge, self.p)
            .mod_inverse(self.p)
            .mod_mul(self.little_h.mod_pow(response, self.p), self.p)
        )
        return ZKProof(Commitment(c_a, c_b), challenge, response)
