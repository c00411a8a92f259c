import secrets

from zkelgamal.bn import BigInteger


def ensure_bn(x):
    """
    Ensure that value is a big integer.

    >>> isinstance(ensure_bn(42), BigInteger)
    True
    >>> ensure_bn("0x2a")
    BigInteger(42)
    """
    if isinstance(x, BigInteger):
        return x
    return BigInteger(x)


def random_below(bound):
    """
    Draw a uniformly random integer in ``[0, bound)`` from a CSPRNG.

    Draws as many random bytes as the bit length of ``bound`` needs, drops the surplus high bits and
    resamples until the candidate is below ``bound``. No modular reduction is involved, so the
    distribution is unbiased.

    >>> x = random_below(10)
    >>> 0 <= x < 10
    True

    Args:
        bound: Exclusive upper bound, must be positive.
    """
    bound = ensure_bn(bound)
    if bound <= 0:
        raise ValueError("Bound must be positive, got {}".format(bound))

    num_bits = bound.bit_length()
    num_bytes = (num_bits + 7) // 8
    surplus = num_bytes * 8 - num_bits
    while True:
        candidate = int.from_bytes(secrets.token_bytes(num_bytes), "big") >> surplus
        if candidate < bound.value:
            return BigInteger(candidate)


def get_random_num(bits):
    """
    Draw a random number of given bitlength.

    >>> x = get_random_num(6)
    >>> x < 2**6
    True
    """
    return random_below(BigInteger(2).pow(bits))


def sum_bn_array(arr, modulus):
    """
    Sum an array of big numbers under a modulus.

    >>> a = [BigInteger(5), BigInteger(7)]
    >>> m = 10
    >>> sum_bn_array(a, m)
    BigInteger(2)
    """
    modulus = ensure_bn(modulus)
    res = BigInteger(0)
    for elem in arr:
        res = res.mod_add(ensure_bn(elem), modulus)
    return res
