"""
ElGamal multiplicatif :
- c1 = g^r mod p
- c0 = m * y^r mod p (où y est la clé publique)

Le déchiffrement calcule c0 * (c1^x)^(-1) = m * g^(xr) * g^(-xr) = m.
"""

import pytest

from anavote.elgamal import (
    DEFAULT_PARAMS, RFC5114_PARAMS, GroupParams,
    EG_generate_keys, EG_encrypt, EG_decrypt
)
from anavote.errors import NoModularInverse


def test_presets_are_valid():
    assert RFC5114_PARAMS.validate()
    assert DEFAULT_PARAMS.validate()


def test_validate_rejects_bad_generator():
    assert not GroupParams(23, 11, 1).validate()
    assert not GroupParams(23, 11, 5).validate()  # 5 est d'ordre 22
    assert GroupParams(23, 11, 4).validate()


def test_keys_in_range(params):
    keys = EG_generate_keys(params)
    assert 1 <= keys.private_key < params.q
    assert keys.public_key == pow(params.g, keys.private_key, params.p)


@pytest.mark.parametrize("message", [
    0, 1, 7,
    0x2661b673f687c5c3142f806d500d2ce57b1182c9b25bfe4fa09529424b,
])
def test_round_trip(params, keys, message):
    c0, c1, r = EG_encrypt(params, keys.public_key, message)
    assert c1 == pow(params.g, r, params.p)
    assert EG_decrypt(params, keys.private_key, c0, c1) == message


def test_round_trip_large_group():
    keys = EG_generate_keys(DEFAULT_PARAMS)
    message = DEFAULT_PARAMS.p - 2
    c0, c1, _ = EG_encrypt(DEFAULT_PARAMS, keys.public_key, message)
    assert EG_decrypt(DEFAULT_PARAMS, keys.private_key, c0, c1) == message


def test_encryption_is_randomized(params, keys):
    first = EG_encrypt(params, keys.public_key, 42)
    second = EG_encrypt(params, keys.public_key, 42)
    assert first[:2] != second[:2]


def test_multiplicative_homomorphism(params, keys):
    m1, m2 = 1234, 5678
    a0, a1, _ = EG_encrypt(params, keys.public_key, m1)
    b0, b1, _ = EG_encrypt(params, keys.public_key, m2)
    product = EG_decrypt(params, keys.private_key, a0 * b0 % params.p, a1 * b1 % params.p)
    assert product == m1 * m2 % params.p


def test_decrypt_without_inverse(params, keys):
    with pytest.raises(NoModularInverse):
        EG_decrypt(params, keys.private_key, 5, 0)
