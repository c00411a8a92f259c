import pytest

from zkelgamal import CryptoSystem


# Fixed secret key used by the known-answer tests.
FIXED_X = 12345678901234567890


@pytest.fixture(scope="session")
def system():
    return CryptoSystem.from_rfc3526()


@pytest.fixture(scope="session")
def keypair(system):
    return system.generate_key_pair_with_private_key(FIXED_X)


@pytest.fixture
def other_keypair(system):
    return system.generate_key_pair()


@pytest.fixture
def toy_system():
    """Safe-prime group p = 23 = 2 * 11 + 1, small enough to enumerate."""
    return CryptoSystem(p=23, q=11, g=4)
