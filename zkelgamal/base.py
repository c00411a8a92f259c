"""
Common classes, including proof transcripts and subclassable basic statements, provers and
verifiers.
"""

import abc
import logging

import attr

from zkelgamal.exceptions import VerificationFailed, ParseError
from zkelgamal.serialization import get_field, parse_bn
from zkelgamal.utils import ensure_bn, random_below

logger = logging.getLogger(__name__)


@attr.s(frozen=True)
class Commitment:
    """
    First message :math:`(A, B)` of a Chaum-Pedersen protocol.
    """

    A = attr.ib(converter=ensure_bn)
    B = attr.ib(converter=ensure_bn)

    @classmethod
    def from_json(cls, data):
        return cls(parse_bn(data, "A"), parse_bn(data, "B"))

    def to_json(self):
        return {"A": str(self.A), "B": str(self.B)}


@attr.s(frozen=True)
class DLogProof:
    """
    Non-interactive Schnorr proof of knowledge of a discrete logarithm.

    The commitment is a single group element.
    """

    commitment = attr.ib(converter=ensure_bn)
    challenge = attr.ib(converter=ensure_bn)
    response = attr.ib(converter=ensure_bn)

    @classmethod
    def from_json(cls, data):
        return cls(
            parse_bn(data, "commitment"),
            parse_bn(data, "challenge"),
            parse_bn(data, "response"),
        )

    def to_json(self):
        return {
            "commitment": str(self.commitment),
            "challenge": str(self.challenge),
            "response": str(self.response),
        }


@attr.s(frozen=True)
class ZKProof:
    """
    Non-interactive Chaum-Pedersen proof that two pairs share a discrete logarithm.

    Used both as an encryption proof (knowledge of the randomness of a ciphertext) and as a
    decryption proof (knowledge of the secret key).
    """

    commitment = attr.ib(validator=attr.validators.instance_of(Commitment))
    challenge = attr.ib(converter=ensure_bn)
    response = attr.ib(converter=ensure_bn)

    @classmethod
    def from_json(cls, data):
        return cls(
            Commitment.from_json(get_field(data, "commitment")),
            parse_bn(data, "challenge"),
            parse_bn(data, "response"),
        )

    def to_json(self):
        return {
            "commitment": self.commitment.to_json(),
            "challenge": str(self.challenge),
            "response": str(self.response),
        }


@attr.s(frozen=True)
class ZKDisjunctiveProof:
    """
    Ordered list of :py:class:`ZKProof`, one per candidate plaintext.

    Exactly one of the proofs is real, the others are simulated, and nothing in the transcript
    tells them apart.
    """

    proofs = attr.ib(converter=tuple)

    @classmethod
    def from_json_proofs(cls, data):
        if not isinstance(data, list):
            raise ParseError("Invalid proofs, expected a list of ZKProof objects")
        return cls(ZKProof.from_json(d) for d in data)

    @classmethod
    def from_json(cls, data):
        return cls.from_json_proofs(get_field(data, "proofs"))

    def to_proofs_json(self):
        return [proof.to_json() for proof in self.proofs]

    def to_json(self):
        return {"proofs": self.to_proofs_json()}

    @property
    def challenges(self):
        return [proof.challenge for proof in self.proofs]

    @property
    def commitments(self):
        return [proof.commitment for proof in self.proofs]

    def __len__(self):
        return len(self.proofs)


@attr.s(frozen=True)
class VerificationResult:
    """
    Outcome of verifying a proof.

    Truthy if and only if the proof verified. A failed result tells which check failed and, for
    disjunctive proofs, at which index. It never contains secret material.

    >>> bool(VerificationResult.success())
    True
    >>> result = VerificationResult.failure("bad proof", index=2)
    >>> bool(result), str(result)
    (False, 'bad proof (index 2)')
    """

    valid = attr.ib()
    reason = attr.ib(default=None)
    index = attr.ib(default=None)
    error = attr.ib(default=VerificationFailed, repr=False, eq=False)

    @classmethod
    def success(cls):
        return cls(True)

    @classmethod
    def failure(cls, reason, index=None, error=VerificationFailed):
        logger.debug("Verification failed: %s (index %s)", reason, index)
        return cls(False, reason=reason, index=index, error=error)

    def at_index(self, index):
        """Attach the position of the failing sub-proof."""
        return attr.evolve(self, index=index)

    def raise_on_failure(self):
        """
        Raises:
            :py:class:`exceptions.VerificationFailed` (or the subclass recorded in ``error``) if
            the proof did not verify.
        """
        if not self.valid:
            raise self.error(str(self))

    def __bool__(self):
        return self.valid

    def __str__(self):
        if self.valid:
            return "valid"
        if self.index is None:
            return self.reason
        return "{} (index {})".format(self.reason, self.index)


class ProofStmt(metaclass=abc.ABCMeta):
    """
    A Sigma-protocol statement about elements of the order-:math:`q` subgroup of
    :math:`\\mathbb{Z}_p^*`.

    Subclasses set ``p`` and ``q``, and the ``prover_cls`` and ``verifier_cls`` attributes.
    """

    prover_cls = None
    verifier_cls = None

    def get_prover(self, secret):
        """
        Get the :py:class:`Prover` for the current statement.

        Args:
            secret: The witness, an exponent modulo :math:`q`.
        """
        return self.prover_cls(self, ensure_bn(secret))

    def get_verifier(self):
        return self.verifier_cls(self)

    def challenge_from(self, challenge_generator, commitment):
        """Derive a challenge modulo :math:`q` from a commitment."""
        return ensure_bn(challenge_generator(commitment)).mod(self.q)

    def prove(self, secret, challenge_generator):
        """
        Generate the transcript of a non-interactive proof.
        """
        return self.get_prover(secret).get_nizk_proof(challenge_generator)

    def verify(self, proof, challenge_generator=None):
        """
        Verify a non-interactive proof.

        Returns:
            VerificationResult
        """
        return self.get_verifier().verify_nizk(proof, challenge_generator)

    def unpack_proof(self, proof):
        return proof.commitment, proof.challenge, proof.response

    def check_ranges(self, exponents, elements):
        """
        Check that exponents lie in :math:`[0, q)` and group elements in :math:`[1, p)`.

        Runs before the verification equations. No exponent is negative past this point, so
        :py:meth:`bn.BigInteger.mod_pow` never has to invert a base.

        Returns:
            VerificationResult: A failure, or ``None`` if every value is in range.
        """
        for exponent in exponents:
            if not 0 <= exponent < self.q:
                return VerificationResult.failure("challenge or response outside [0, q)")
        for element in elements:
            if not 1 <= element < self.p:
                return VerificationResult.failure("group element outside [1, p)")
        return None

    @abc.abstractmethod
    def build_proof(self, commitment, challenge, response):
        """Pack the three moves into a transcript object."""

    @abc.abstractmethod
    def check_transcript(self, commitment, challenge, response):
        """
        Check the verification equations.

        Returns:
            VerificationResult
        """


class Prover(metaclass=abc.ABCMeta):
    """
    Abstract interface representing Prover used in sigma protocols.

    Args:
        stmt: The statement from which we draw the Prover.
        secret: The witness.
    """

    def __init__(self, stmt, secret):
        self.stmt = stmt
        self.secret = secret
        self.randomizer = None

    @abc.abstractmethod
    def internal_commit(self, randomizer):
        """Compute the commitment for the given randomizer."""

    def commit(self, randomizer=None):
        """
        Construct the proof commitment.

        Args:
            randomizer: Optional randomizer :math:`w`. Drawn uniformly from :math:`[0, q)` if not
                given. Never reuse one across proofs.
        """
        if randomizer is None:
            randomizer = random_below(self.stmt.q)
        self.randomizer = ensure_bn(randomizer)
        return self.internal_commit(self.randomizer)

    def compute_response(self, challenge):
        """
        Compute :math:`w + x c \\bmod q`.
        """
        if self.randomizer is None:
            raise ValueError("commit() must be called before compute_response()")
        return self.randomizer.mod_add(self.secret.multiply(challenge), self.stmt.q)

    def get_nizk_proof(self, challenge_generator):
        """
        Construct a non-interactive proof transcript using Fiat-Shamir heuristic.

        Args:
            challenge_generator: Maps the commitment to the challenge.
        """
        commitment = self.commit()
        challenge = self.stmt.challenge_from(challenge_generator, commitment)
        response = self.compute_response(challenge)
        return self.stmt.build_proof(commitment, challenge, response)


class Verifier:
    """
    Verifier used in sigma protocols, both interactive and non-interactive.
    """

    def __init__(self, stmt):
        self.stmt = stmt
        self.commitment = None
        self.challenge = None

    def send_challenge(self, commitment):
        """
        Store the received commitment and generate a challenge.

        The challenge is chosen uniformly at random in :math:`[0, q)`.
        """
        self.commitment = commitment
        self.challenge = random_below(self.stmt.q)
        return self.challenge

    def verify(self, response):
        """
        Verify the response of an interactive sigma protocol.

        Returns:
            VerificationResult
        """
        return self.stmt.check_transcript(self.commitment, self.challenge, response)

    def verify_nizk(self, proof, challenge_generator=None):
        """
        Verify a non-interactive proof.

        Args:
            proof: Transcript produced by :py:meth:`Prover.get_nizk_proof`.
            challenge_generator: If given, the challenge must also equal the hash of the
                commitment.

        Returns:
            VerificationResult
        """
        commitment, challenge, response = self.stmt.unpack_proof(proof)
        result = self.stmt.check_transcript(commitment, challenge, response)
        if not result:
            return result

        if challenge_generator is not None:
            expected = self.stmt.challenge_from(challenge_generator, commitment)
            if challenge != expected:
                return VerificationResult.failure(
                    "challenge does not match the hash of the commitment"
                )
        return result
