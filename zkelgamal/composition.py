r"""
Disjunctive ("or") composition of Chaum-Pedersen proofs.

.. math::
    PK\{ (x): S_0 \lor S_1 \lor \dots \lor S_{n-1} \}

The prover knows the witness for one clause only. It simulates every other clause with an
independently drawn challenge, commits honestly for the real clause, and receives one global
challenge :math:`c`. The real clause then gets the residual challenge
:math:`c - \sum_{i \neq real} c_i \bmod q`, so that the challenges sum to :math:`c` and no
clause stands out.
"""

from zkelgamal.base import ProofStmt, Prover, Verifier, VerificationResult
from zkelgamal.base import ZKDisjunctiveProof, ZKProof
from zkelgamal.challenges import disjunctive_challenge
from zkelgamal.exceptions import InvalidRealIndex, ProofCountMismatch
from zkelgamal.utils import ensure_bn, sum_bn_array


def _find_residual_challenge(subchallenges, challenge, modulus):
    r"""
    Determine the complement to a global challenge in a list

    For example, to find :math:`c_1` such that :math:`c = c_1 + c_2 + c_3 \mod k`, we compute
    :math:`c - (c_2 + c_3) \mod k`.

    >>> _find_residual_challenge([3, 4], 2, 11)
    BigInteger(6)

    Args:
        subchallenges: The array of subchallenges :math:`c_2, c_3, ...`
        challenge: The global challenge to reach
        modulus: the modulus :math:`k`
    """
    return ensure_bn(challenge).mod_sub(sum_bn_array(subchallenges, modulus), modulus)


class OrProofStmt(ProofStmt):
    """
    A disjunction of several Chaum-Pedersen statements.

    All subproofs must live in the same group.

    Args:
        subproofs: :py:class:`primitives.dh_tuple.DHTupleStmt` objects.

    Raises:
        ValueError: If no subproofs are given or their groups differ.
    """

    def __init__(self, *subproofs):
        if len(subproofs) < 1:
            raise ValueError("Need at least one subproof")
        self.subproofs = list(subproofs)
        self.p = self.subproofs[0].p
        self.q = self.subproofs[0].q
        for sub in self.subproofs:
            if sub.p != self.p or sub.q != self.q:
                raise ValueError("All subproofs must share the same group")

    def get_prover(self, secret, real_index=None):
        """
        Get the prover for the clause at ``real_index``, for which ``secret`` is a witness.

        Raises:
            :py:class:`exceptions.InvalidRealIndex`: If ``real_index`` is out of range.
        """
        if real_index is None or not 0 <= real_index < len(self.subproofs):
            raise InvalidRealIndex(
                "real_index must be in [0, {}), got {}".format(len(self.subproofs), real_index)
            )
        subprover = self.subproofs[real_index].get_prover(secret)
        return OrProver(self, real_index, subprover)

    def get_verifier(self):
        return OrVerifier(self)

    def prove(self, secret, real_index, challenge_generator=disjunctive_challenge):
        """
        Generate the transcript of a non-interactive disjunctive proof.

        Args:
            secret: Witness for the real clause.
            real_index: Position of the real clause.
            challenge_generator: Maps the list of all commitments to the global challenge.
        """
        prover = self.get_prover(secret, real_index)
        return prover.get_nizk_proof(challenge_generator)

    def verify(self, proof, challenge_generator=disjunctive_challenge):
        return self.get_verifier().verify_nizk(proof, challenge_generator)

    def build_proof(self, commitment, challenge, response):
        challenges, responses = response
        return ZKDisjunctiveProof(
            ZKProof(com, chal, resp)
            for com, chal, resp in zip(commitment, challenges, responses)
        )

    def check_transcript(self, commitment, challenge, response):
        """
        Check every clause against its own challenge, then the challenges against the global one.

        Args:
            commitment: List of commitments, one per clause.
            challenge: The global challenge.
            response: A pair (list of subchallenges, list of responses).
        """
        challenges, responses = response
        if not (len(commitment) == len(challenges) == len(responses) == len(self.subproofs)):
            return VerificationResult.failure(
                "bad number of proofs (expected {}, found {})".format(
                    len(self.subproofs), len(commitment)
                ),
                error=ProofCountMismatch,
            )

        for index, subproof in enumerate(self.subproofs):
            result = subproof.check_transcript(
                commitment[index], challenges[index], responses[index]
            )
            # Stop at the first failing clause.
            if not result:
                return result.at_index(index)

        if _find_residual_challenge(challenges, challenge, self.q) != 0:
            return VerificationResult.failure(
                "sum of challenges does not match the disjunctive challenge"
            )
        return VerificationResult.success()


class OrProver(Prover):
    """
    Prover for the or-proof.

    This prover is built with only one subprover, and needs to have access to the index of the
    corresponding subproof in its mother proof. Runs all the simulations for the other proofs and
    stores them.
    """

    def __init__(self, stmt, real_index, subprover):
        super().__init__(stmt, subprover.secret)
        self.subprover = subprover
        self.real_index = real_index
        self.setup_simulations()

    def setup_simulations(self):
        """
        Run all the required simulations and stores them.

        Every simulation draws its own challenge and response.
        """
        self.simulations = {}
        for index, subproof in enumerate(self.stmt.subproofs):
            if index != self.real_index:
                self.simulations[index] = subproof.simulate()

    def internal_commit(self, randomizer):
        """
        Commit honestly for the real clause and gather the simulated commitments.
        """
        commitment = []
        for index in range(len(self.stmt.subproofs)):
            if index == self.real_index:
                commitment.append(self.subprover.commit(randomizer))
            else:
                commitment.append(self.simulations[index].commitment)
        return commitment

    def compute_response(self, challenge):
        """
        Compute complementary challenges and responses.

        Returns both the complete list of subchallenges (including the residual challenge of the
        real clause) and the list of responses, both ordered.

        Args:
            challenge: The global challenge to use. All subchallenges must add to this one.
        """
        residual_chal = _find_residual_challenge(
            [sim.challenge for sim in self.simulations.values()], challenge, self.stmt.q
        )
        challenges = []
        responses = []
        for index in range(len(self.stmt.subproofs)):
            if index == self.real_index:
                challenges.append(residual_chal)
                responses.append(self.subprover.compute_response(residual_chal))
            else:
                challenges.append(self.simulations[index].challenge)
                responses.append(self.simulations[index].response)
        return challenges, responses


class OrVerifier(Verifier):
    """
    Verifier for the or-proof.
    """

    def verify_nizk(self, proof, challenge_generator=disjunctive_challenge):
        """
        Verify a non-interactive disjunctive proof.

        The global challenge is recomputed from all the commitments in the proof.

        Args:
            proof (:py:class:`base.ZKDisjunctiveProof`): The proof.
            challenge_generator: Maps the list of commitments to the global challenge.
        """
        if len(proof.proofs) != len(self.stmt.subproofs):
            return VerificationResult.failure(
                "bad number of proofs (expected {}, found {})".format(
                    len(self.stmt.subproofs), len(proof.proofs)
                ),
                error=ProofCountMismatch,
            )

        challenge = self.stmt.challenge_from(challenge_generator, proof.commitments)
        responses = [sub.response for sub in proof.proofs]
        return self.stmt.check_transcript(
            proof.commitments, challenge, (proof.challenges, responses)
        )
