import logging

import pytest

from zkelgamal.crypto_system import CryptoSystem
from zkelgamal.elgamal import KeyPair
from zkelgamal.exceptions import ParameterSearchAborted, ParameterSizeError, ParseError
from zkelgamal.plaintext import Plaintext
from zkelgamal.serialization import dumps, loads


def test_rfc3526_group(system):
    assert system.p.bit_length() == 2048
    assert system.p == 2 * system.q + 1
    assert system.g == 4
    assert system.validate()


def test_toy_group(toy_system):
    assert toy_system.validate()


@pytest.mark.parametrize(
    "p, q, g, reason",
    [
        (21, 11, 4, "p is not prime"),
        (23, 12, 4, "q is not prime"),
        (23, 7, 4, "q does not divide p - 1"),
        (23, 11, 1, "g is not in (1, p)"),
        (23, 11, 5, "g does not have order q"),
    ],
)
def test_invalid_group(p, q, g, reason):
    result = CryptoSystem(p, q, g).validate()
    assert not result
    assert result.reason == reason


def test_generate_key_pair(system):
    keypair = system.generate_key_pair()
    assert isinstance(keypair, KeyPair)
    assert keypair.pk.g == system.g
    assert keypair.pk.y == system.g.mod_pow(keypair.sk.x, system.p)


def test_generate_key_pair_with_private_key(system):
    keypair = system.generate_key_pair_with_private_key(5)
    assert keypair.pk.y == system.g.mod_pow(5, system.p)


def test_json_round_trip(system):
    data = system.to_json()
    assert set(data) == {"p", "q", "g"}
    assert CryptoSystem.from_json(data) == system
    assert loads(CryptoSystem, dumps(system)) == system


def test_json_missing_field():
    with pytest.raises(ParseError):
        CryptoSystem.from_json({"p": "23", "q": "11"})


def test_generate_secure_parameters(caplog):
    caplog.set_level(logging.INFO)
    with pytest.warns(UserWarning):
        system = CryptoSystem.generate_secure_parameters(512, q_bits=160)

    assert system.p.bit_length() == 512
    assert system.q.bit_length() == 160
    assert system.validate()
    assert "below the recommended" in caplog.text
    assert "Generated 512-bit parameters" in caplog.text

    keypair = system.generate_key_pair()
    ciphertext = keypair.pk.encrypt(Plaintext(77))
    assert keypair.sk.decrypt(ciphertext) == Plaintext(77)


@pytest.mark.parametrize("bits", [0, 256, 511])
def test_generate_secure_parameters_too_small(bits):
    with pytest.raises(ParameterSizeError):
        CryptoSystem.generate_secure_parameters(bits)


def test_generate_secure_parameters_bad_subgroup_size():
    with pytest.raises(ParameterSizeError):
        CryptoSystem.generate_secure_parameters(512, q_bits=511)


def test_generate_secure_parameters_abort():
    with pytest.warns(UserWarning):
        with pytest.raises(ParameterSearchAborted):
            CryptoSystem.generate_secure_parameters(512, should_abort=lambda: True)
