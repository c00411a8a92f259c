__version__ = "0.1.0"
__title__ = "zkelgamal"
__author__ = "zkelgamal contributors"
__email__ = "zkelgamal@users.noreply.github.com"
__url__ = "https://github.com/zkelgamal/zkelgamal"
__license__ = "MIT"
__description__ = "ElGamal encryption over prime-order subgroups with homomorphic operations and Fiat-Shamir zero-knowledge proofs."
__copyright__ = "2026, zkelgamal contributors"


from zkelgamal.bn import BigInteger
from zkelgamal.base import (
    Commitment,
    DLogProof,
    ZKProof,
    ZKDisjunctiveProof,
    VerificationResult,
)
from zkelgamal.challenges import (
    disjunctive_challenge,
    dlog_challenge,
    fiat_shamir_challenge,
)
from zkelgamal.elgamal import BareCiphertext, Ciphertext, KeyPair, PublicKey, SecretKey
from zkelgamal.crypto_system import CryptoSystem
from zkelgamal.plaintext import Plaintext
from zkelgamal.utils import random_below, is_probably_prime, sha1_to_int
