"""
ElGamal keys and ciphertexts over the subgroup of order :math:`q` of :math:`\\mathbb{Z}_p^*`.

>>> keypair = KeyPair.create_with_private_key(p=23, q=11, g=4, x=7)
>>> ciphertext = keypair.pk.encrypt_with_r(Plaintext(9), r=3)
>>> keypair.sk.decrypt(ciphertext)
Plaintext(m=BigInteger(9))
"""

import logging

import attr

from zkelgamal.base import VerificationResult
from zkelgamal.bn import BigInteger
from zkelgamal.challenges import dlog_challenge, disjunctive_challenge, fiat_shamir_challenge
from zkelgamal.composition import OrProofStmt
from zkelgamal.exceptions import (
    IncompatibleKeys,
    InvalidRealIndex,
    KeyMismatch,
    NoInverseExists,
    ParseError,
    ProofCountMismatch,
)
from zkelgamal.plaintext import Plaintext
from zkelgamal.plaintext import decode_message as decode_from_subgroup
from zkelgamal.plaintext import encode_message as encode_to_subgroup
from zkelgamal.primitives.dh_tuple import DHTupleStmt
from zkelgamal.primitives.dlog import DLogStmt
from zkelgamal.serialization import get_field, parse_bn
from zkelgamal.utils import ensure_bn, fingerprint, random_below

logger = logging.getLogger(__name__)


@attr.s(frozen=True)
class PublicKey:
    """
    ElGamal public key :math:`y = g^x \\bmod p`.

    Every key of a deployment shares the same :math:`(p, q, g)`.
    """

    p = attr.ib(converter=ensure_bn)
    q = attr.ib(converter=ensure_bn)
    g = attr.ib(converter=ensure_bn)
    y = attr.ib(converter=ensure_bn)

    @classmethod
    def from_json(cls, data):
        return cls(
            parse_bn(data, "p"),
            parse_bn(data, "q"),
            parse_bn(data, "g"),
            parse_bn(data, "y"),
        )

    def to_json(self):
        return {"p": str(self.p), "q": str(self.q), "g": str(self.g), "y": str(self.y)}

    def identity(self):
        """
        The neutral element for :py:meth:`multiply`, the key with :math:`y = 1`.
        """
        return PublicKey(self.p, self.q, self.g, 1)

    def is_compatible(self, other):
        return self.p == other.p and self.q == other.q and self.g == other.g

    def encrypt_with_r(self, plaintext, r, encode_message=False):
        """
        Encrypt with explicit randomness.

        Args:
            plaintext (:py:class:`plaintext.Plaintext`): Message.
            r: Randomness in :math:`[0, q)`.
            encode_message (bool): Map the message into the order-:math:`q` subgroup first (see
                :py:func:`plaintext.encode_message`). Needs a safe-prime group.
        """
        r = ensure_bn(r)
        if encode_message:
            m = encode_to_subgroup(plaintext.m, self.p, self.q)
        else:
            m = plaintext.m

        alpha = self.g.mod_pow(r, self.p)
        beta = self.y.mod_pow(r, self.p).mod_mul(m, self.p)
        return Ciphertext(alpha, beta, self)

    def encrypt_return_r(self, plaintext, encode_message=False):
        """
        Encrypt a plaintext and return the randomness just generated and used.
        """
        r = random_below(self.q)
        return self.encrypt_with_r(plaintext, r, encode_message), r

    def encrypt(self, plaintext, encode_message=False):
        """
        Encrypt a plaintext, obscure the randomness.
        """
        return self.encrypt_return_r(plaintext, encode_message)[0]

    def encrypt_with_proof(self, plaintext, challenge_generator=fiat_shamir_challenge):
        """
        Encrypt a plaintext and prove knowledge of the randomness.

        Returns:
            tuple: (:py:class:`Ciphertext`, :py:class:`base.ZKProof`)
        """
        ciphertext, r = self.encrypt_return_r(plaintext)
        proof = ciphertext.generate_encryption_proof(plaintext, r, challenge_generator)
        return ciphertext, proof

    def multiply(self, other):
        """
        Combine two public keys into a joint key, :math:`y = y_1 y_2 \\bmod p`.

        Ciphertexts under the joint key need a decryption factor from every holder.

        Raises:
            :py:class:`exceptions.IncompatibleKeys`: If the group parameters differ.
        """
        if not self.is_compatible(other):
            raise IncompatibleKeys("incompatible public keys")
        return PublicKey(self.p, self.q, self.g, self.y.mod_mul(other.y, self.p))

    __mul__ = multiply

    def verify_sk_proof(self, dlog_proof, challenge_generator=dlog_challenge):
        """
        Verify the proof of knowledge of the secret key.

        Checks :math:`g^{response} = commitment \\cdot y^{challenge}` and that the challenge is
        the hash of the commitment.

        Returns:
            :py:class:`base.VerificationResult`
        """
        stmt = DLogStmt(self.p, self.q, self.g, self.y)
        return stmt.verify(dlog_proof, challenge_generator)

    def fingerprint(self):
        """
        Stable identifier of the key: the first 20 bytes of the SHA-256 of the concatenated
        decimal strings of :math:`p, q, g, y`, as colon-separated hex.
        """
        return fingerprint(self.p, self.q, self.g, self.y)


@attr.s(frozen=True)
class SecretKey:
    """
    ElGamal secret exponent :math:`x`, bound to its public key.
    """

    x = attr.ib(converter=ensure_bn, repr=False)
    public_key = attr.ib(validator=attr.validators.instance_of(PublicKey))

    @property
    def pk(self):
        return self.public_key

    @classmethod
    def create_from_public_key(cls, pk):
        """
        Draw a fresh exponent :math:`x \\in [0, q)` in the group of ``pk``.

        The new key keeps ``pk`` as its public key, so :math:`y` is not :math:`g^x`. Use
        :py:meth:`KeyPair.create` for a matching pair.
        """
        return cls(random_below(pk.q), pk)

    @classmethod
    def from_json(cls, data):
        return cls(parse_bn(data, "x"), PublicKey.from_json(get_field(data, "publicKey")))

    def to_json(self):
        return {"x": str(self.x), "publicKey": self.public_key.to_json()}

    def decryption_factor(self, ciphertext):
        """
        Provide the decryption factor :math:`\\alpha^x \\bmod p`, not yet inverted because of
        needed proof.
        """
        return ciphertext.alpha.mod_pow(self.x, self.pk.p)

    def decryption_factor_and_proof(self, ciphertext, challenge_generator=fiat_shamir_challenge):
        """
        Compute the decryption factor and prove it was computed with this key.

        The proof shows that :math:`(g, \\alpha, y, factor)` is a DH tuple.

        Returns:
            tuple: (factor, :py:class:`base.ZKProof`)
        """
        dec_factor = self.decryption_factor(ciphertext)
        stmt = _decryption_factor_stmt(ciphertext, dec_factor, self.pk)
        return dec_factor, stmt.prove(self.x, challenge_generator)

    def decrypt(self, ciphertext, dec_factor=None, decode_m=False):
        """
        Decrypt a ciphertext.

        Args:
            ciphertext (:py:class:`Ciphertext`): Ciphertext.
            dec_factor: Precomputed decryption factor, computed if not given.
            decode_m (bool): Map the message back from the order-:math:`q` subgroup (the inverse
                of ``encode_message`` in :py:meth:`PublicKey.encrypt_with_r`).
        """
        if dec_factor is None:
            dec_factor = self.decryption_factor(ciphertext)

        m = ensure_bn(dec_factor).mod_inverse(self.pk.p).mod_mul(ciphertext.beta, self.pk.p)
        if decode_m:
            return Plaintext(decode_from_subgroup(m, self.pk.p, self.pk.q))
        return Plaintext(m)

    def prove_decryption(self, ciphertext, challenge_generator=fiat_shamir_challenge):
        """
        Decrypt and prove correct decryption with Chaum-Pedersen.

        Prover sends :math:`a = g^w`, :math:`b = \\alpha^w` for random :math:`w`, the challenge
        is :math:`c = H(a, b)` and the response is :math:`t = w + x c \\bmod q`. The verifier
        checks :math:`g^t = a y^c` and :math:`\\alpha^t = b (\\beta / m)^c`.

        Returns:
            tuple: (:py:class:`plaintext.Plaintext`, :py:class:`base.ZKProof`)
        """
        plaintext = self.decrypt(ciphertext)
        stmt = _decryption_stmt(ciphertext, plaintext, self.pk)
        return plaintext, stmt.prove(self.x, challenge_generator)

    def prove_sk(self, challenge_generator=dlog_challenge):
        """
        Generate a proof of knowledge of the secret key.

        Returns:
            :py:class:`base.DLogProof`
        """
        stmt = DLogStmt(self.pk.p, self.pk.q, self.pk.g, self.pk.y)
        return stmt.prove(self.x, challenge_generator)


@attr.s(frozen=True)
class KeyPair:
    pk = attr.ib(validator=attr.validators.instance_of(PublicKey))
    sk = attr.ib(validator=attr.validators.instance_of(SecretKey))

    @classmethod
    def create(cls, p, q, g):
        """
        Generate a key pair with :math:`x` uniform in :math:`[0, q)`.
        """
        return cls.create_with_private_key(p, q, g, random_below(q))

    @classmethod
    def create_with_private_key(cls, p, q, g, x):
        x = ensure_bn(x)
        g = ensure_bn(g)
        y = g.mod_pow(x, p)
        public_key = PublicKey(p, q, g, y)
        return cls(public_key, SecretKey(x, public_key))

    @classmethod
    def from_json(cls, data):
        return cls(
            PublicKey.from_json(get_field(data, "pk")),
            SecretKey.from_json(get_field(data, "sk")),
        )

    def to_json(self):
        return {"pk": self.pk.to_json(), "sk": self.sk.to_json()}


@attr.s(frozen=True)
class BareCiphertext:
    """
    The :math:`(\\alpha, \\beta)` pair of a ciphertext without its key.

    Serialized as ``{alpha, beta}``; attach a key with :py:meth:`with_key` to operate on it.
    """

    alpha = attr.ib(converter=ensure_bn)
    beta = attr.ib(converter=ensure_bn)

    @classmethod
    def from_json(cls, data):
        return cls(parse_bn(data, "alpha"), parse_bn(data, "beta"))

    @classmethod
    def from_string(cls, text):
        """
        Parse the compact ``"alpha,beta"`` form.

        >>> BareCiphertext.from_string("12,34")
        BareCiphertext(alpha=BigInteger(12), beta=BigInteger(34))

        Raises:
            :py:class:`exceptions.ParseError`: If the string is not two comma-separated integers.
        """
        parts = text.split(",")
        if len(parts) != 2:
            raise ParseError('Invalid Ciphertext, expected format: "alpha,beta"')
        return cls(BigInteger.from_decimal(parts[0]), BigInteger.from_decimal(parts[1]))

    def to_json(self):
        return {"alpha": str(self.alpha), "beta": str(self.beta)}

    def with_key(self, pk):
        return Ciphertext(self.alpha, self.beta, pk)

    def __str__(self):
        return "{},{}".format(self.alpha, self.beta)


@attr.s(frozen=True)
class Ciphertext:
    """
    ElGamal ciphertext :math:`(\\alpha, \\beta) = (g^r, y^r m)`, together with its public key.
    """

    alpha = attr.ib(converter=ensure_bn)
    beta = attr.ib(converter=ensure_bn)
    pk = attr.ib(validator=attr.validators.instance_of(PublicKey))

    @classmethod
    def from_json(cls, data):
        return cls(
            parse_bn(data, "alpha"),
            parse_bn(data, "beta"),
            PublicKey.from_json(get_field(data, "pk")),
        )

    @classmethod
    def from_data(cls, data, pk):
        """Build from the key-less ``{alpha, beta}`` form."""
        return BareCiphertext.from_json(data).with_key(pk)

    @classmethod
    def from_string(cls, text, pk):
        """Build from the compact ``"alpha,beta"`` form."""
        return BareCiphertext.from_string(text).with_key(pk)

    @classmethod
    def identity(cls, pk):
        """
        The neutral element for :py:meth:`multiply`, an encryption of 1 with :math:`r = 0`.
        """
        return cls(1, 1, pk)

    def to_json(self):
        return {"alpha": str(self.alpha), "beta": str(self.beta), "pk": self.pk.to_json()}

    def without_key(self):
        return BareCiphertext(self.alpha, self.beta)

    def multiply(self, other):
        """
        Homomorphic multiplication of ciphertexts.

        The product decrypts to the product of the plaintexts modulo :math:`p`.

        Raises:
            :py:class:`exceptions.KeyMismatch`: If the ciphertexts use different public keys.
        """
        if self.pk != other.pk:
            raise KeyMismatch("Cannot multiply ciphertexts under different public keys")
        return Ciphertext(
            self.alpha.mod_mul(other.alpha, self.pk.p),
            self.beta.mod_mul(other.beta, self.pk.p),
            self.pk,
        )

    __mul__ = multiply

    def reenc_with_r(self, r):
        """
        Re-encrypt by multiplying with an encryption of 1 under randomness ``r``.
        """
        r = ensure_bn(r)
        alpha = self.alpha.mod_mul(self.pk.g.mod_pow(r, self.pk.p), self.pk.p)
        beta = self.beta.mod_mul(self.pk.y.mod_pow(r, self.pk.p), self.pk.p)
        return Ciphertext(alpha, beta, self.pk)

    def reenc_return_r(self):
        """
        Reencryption with fresh randomness, which is returned.
        """
        r = random_below(self.pk.q)
        return self.reenc_with_r(r), r

    def reenc(self):
        """
        Reencryption with fresh randomness, which is kept obscured.
        """
        return self.reenc_return_r()[0]

    def _beta_over(self, m):
        return self.beta.mod_mul(ensure_bn(m).mod_inverse(self.pk.p), self.pk.p)

    def _encryption_stmt(self, plaintext):
        return DHTupleStmt(
            self.pk.p,
            self.pk.q,
            self.pk.g,
            self.pk.y,
            self.alpha,
            self._beta_over(plaintext.m),
            names=("g", "y", "alpha", "beta/m"),
        )

    def generate_encryption_proof(self, plaintext, randomness, challenge_generator=fiat_shamir_challenge):
        """
        Prove that this ciphertext encrypts ``plaintext``, by proving knowledge of the randomness.

        Commits to :math:`A = g^w`, :math:`B = y^w`, and answers
        :math:`w + r \\cdot challenge \\bmod q`.

        Args:
            plaintext: The encrypted plaintext.
            randomness: The randomness :math:`r` used for encryption.
            challenge_generator: Maps a :py:class:`base.Commitment` to a challenge.

        Returns:
            :py:class:`base.ZKProof`
        """
        return self._encryption_stmt(plaintext).prove(randomness, challenge_generator)

    def simulate_encryption_proof(self, plaintext, challenge=None):
        """
        Simulate an encryption proof for ``plaintext`` without knowing the randomness.

        Args:
            plaintext: Claimed plaintext.
            challenge: Optional challenge, drawn at random if not given.
        """
        return self._encryption_stmt(plaintext).simulate(challenge)

    def generate_disjunctive_encryption_proof(
        self, plaintexts, real_index, randomness, challenge_generator=disjunctive_challenge
    ):
        """
        Prove that this ciphertext encrypts one of ``plaintexts`` without revealing which.

        The proofs for all indices but ``real_index`` are simulated, the real one gets the
        residual of the global challenge computed over all commitments.

        Args:
            plaintexts: Candidate plaintexts.
            real_index: Index of the plaintext actually encrypted.
            randomness: Randomness used for encryption.
            challenge_generator: Maps the list of commitments to the global challenge.

        Returns:
            :py:class:`base.ZKDisjunctiveProof`

        Raises:
            :py:class:`exceptions.InvalidRealIndex`: If ``real_index`` does not point to a
                plaintext.
        """
        if not isinstance(real_index, int) or not 0 <= real_index < len(plaintexts):
            raise InvalidRealIndex("realIndex is invalid: {}".format(real_index))

        stmt = OrProofStmt(*[self._encryption_stmt(plaintext) for plaintext in plaintexts])
        return stmt.prove(randomness, real_index, challenge_generator)

    def verify_encryption_proof(self, plaintext, proof, challenge_generator=None):
        """
        Checks for the DDH tuple :math:`(g, y, \\alpha, \\beta / m)`.

        Verifies :math:`g^{response} = A \\alpha^{challenge}` and
        :math:`y^{response} = B (\\beta / m)^{challenge}`.

        Args:
            plaintext: Claimed plaintext.
            proof (:py:class:`base.ZKProof`): The proof.
            challenge_generator: If given, also check the challenge is the hash of the commitment.

        Returns:
            :py:class:`base.VerificationResult`
        """
        try:
            stmt = self._encryption_stmt(plaintext)
        except NoInverseExists:
            return VerificationResult.failure("plaintext is not invertible modulo p")
        return stmt.verify(proof, challenge_generator)

    def verify_disjunctive_encryption_proof(
        self, plaintexts, proof, challenge_generator=disjunctive_challenge
    ):
        """
        Verify that this ciphertext encrypts one of ``plaintexts``.

        ``plaintexts`` and ``proof.proofs`` must have equal length and matching order. Every
        proof must verify, and the challenges must sum to the global challenge.

        Returns:
            :py:class:`base.VerificationResult`
        """
        if len(plaintexts) != len(proof.proofs):
            return VerificationResult.failure(
                "bad number of proofs (expected {}, found {})".format(
                    len(plaintexts), len(proof.proofs)
                ),
                error=ProofCountMismatch,
            )
        if not plaintexts:
            return VerificationResult.failure("no candidate plaintexts")

        stmts = []
        for index, plaintext in enumerate(plaintexts):
            try:
                stmts.append(self._encryption_stmt(plaintext))
            except NoInverseExists:
                return VerificationResult.failure(
                    "plaintext is not invertible modulo p", index=index
                )
        return OrProofStmt(*stmts).verify(proof, challenge_generator)

    def verify_decryption_proof(self, plaintext, proof, challenge_generator=fiat_shamir_challenge):
        """
        Checks for the DDH tuple :math:`(g, \\alpha, y, \\beta / m)`, i.e. knowledge of the secret
        key that decrypts this ciphertext to ``plaintext``.

        Returns:
            :py:class:`base.VerificationResult`
        """
        try:
            stmt = _decryption_stmt(self, plaintext, self.pk)
        except NoInverseExists:
            return VerificationResult.failure("plaintext is not invertible modulo p")
        return stmt.verify(proof, challenge_generator)

    def verify_decryption_factor(
        self, dec_factor, dec_proof, public_key, challenge_generator=fiat_shamir_challenge
    ):
        """
        Check that ``dec_factor`` is :math:`\\alpha^x` for the secret key behind ``public_key``.

        Returns:
            :py:class:`base.VerificationResult`
        """
        stmt = _decryption_factor_stmt(self, dec_factor, public_key)
        return stmt.verify(dec_proof, challenge_generator)

    def decrypt(self, decryption_factors, public_key):
        """
        Decrypt given a list of decryption factors, one from each holder of a share of the key.

        Args:
            decryption_factors: Factors :math:`\\alpha^{x_i} \\bmod p`.
            public_key: Key providing the modulus.

        Returns:
            :py:class:`plaintext.Plaintext`
        """
        running_decryption = self.beta
        for dec_factor in decryption_factors:
            running_decryption = running_decryption.mod_mul(
                ensure_bn(dec_factor).mod_inverse(public_key.p), public_key.p
            )
        return Plaintext(running_decryption)

    def __str__(self):
        return "{},{}".format(self.alpha, self.beta)


def _decryption_stmt(ciphertext, plaintext, pk):
    return DHTupleStmt(
        pk.p,
        pk.q,
        pk.g,
        ciphertext.alpha,
        pk.y,
        ciphertext._beta_over(plaintext.m),
        names=("g", "alpha", "y", "beta/m"),
    )


def _decryption_factor_stmt(ciphertext, dec_factor, pk):
    return DHTupleStmt(
        pk.p, pk.q, pk.g, ciphertext.alpha, pk.y, dec_factor, names=("g", "alpha", "y", "factor")
    )
