from zkelgamal.utils.groups import ensure_bn, get_random_num, random_below, sum_bn_array
from zkelgamal.utils.primes import get_prime, is_probably_prime
from zkelgamal.utils.hashing import (
    fingerprint,
    format_fingerprint,
    sha1_fingerprint,
    sha1_hex,
    sha1_to_int,
)
