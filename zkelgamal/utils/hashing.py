"""
Hash-to-integer helpers.

The digest is read as a big-endian unsigned integer.

>>> sha1_to_int("hello")
BigInteger(975987071262755080377722350727279193143145743181)
"""

import hashlib

from zkelgamal.bn import BigInteger
from zkelgamal.consts import CHALLENGE_HASH, FINGERPRINT_HASH, FINGERPRINT_LENGTH


def sha1_hex(text):
    """
    >>> sha1_hex("11")
    '17ba0791499db908433b80f37c5fbc89b870084b'
    """
    return hashlib.new(CHALLENGE_HASH, text.encode("utf-8")).hexdigest()


def sha1_to_int(text):
    return BigInteger.from_hex(sha1_hex(text))


def format_fingerprint(digest, length=FINGERPRINT_LENGTH):
    """
    Render the first ``length`` bytes of a digest as colon-separated upper-case hex.

    >>> format_fingerprint(bytes([0xaa, 0xf4, 0x01]))
    'AA:F4:01'
    """
    return ":".join("{:02X}".format(byte) for byte in digest[:length])


def sha1_fingerprint(text):
    """
    >>> sha1_fingerprint("hello")
    'AA:F4:C6:1D:DC:C5:E8:A2:DA:BE:DE:0F:3B:48:2C:D9:AE:A9:43:4D'
    """
    return format_fingerprint(hashlib.new(CHALLENGE_HASH, text.encode("utf-8")).digest())


def fingerprint(*parts):
    """Fingerprint the concatenated decimal strings of ``parts``."""
    data = "".join(str(part) for part in parts).encode("utf-8")
    return format_fingerprint(hashlib.new(FINGERPRINT_HASH, data).digest())
