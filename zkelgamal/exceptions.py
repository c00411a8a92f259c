"""
Common exception classes.
"""


class ParseError(ValueError):
    """Malformed numeric string, ciphertext string, or JSON document."""


class InvalidModulus(ValueError):
    """Modulus is zero or negative."""


class NoInverseExists(ArithmeticError):
    """Value is not invertible modulo the given modulus."""


class IncompatibleKeys(Exception):
    """Public keys do not share the same group parameters."""


class KeyMismatch(Exception):
    """Ciphertexts were produced under different public keys."""


class InvalidRealIndex(IndexError):
    """Index of the real branch of a disjunctive proof is out of range."""


class ParameterSizeError(ValueError):
    """Requested parameter size is below the security floor."""


class ParameterSearchAborted(Exception):
    """Parameter generation was cancelled by the caller."""


class MessageEncodingError(ValueError):
    """Message cannot be encoded into the prime-order subgroup."""


class VerificationFailed(Exception):
    """A proof does not satisfy its verification equations."""


class ProofCountMismatch(VerificationFailed):
    """Number of proofs does not match the number of candidate plaintexts."""
