import pytest

from anavote.anamorphic import AnamorphicParams, AEG_generate_keys
from anavote.elgamal import RFC5114_PARAMS, EG_generate_keys

# Domaine réduit pour que la boucle de rejet reste rapide
TEST_L = 128


@pytest.fixture(scope="module")
def params():
    return RFC5114_PARAMS


@pytest.fixture(scope="module")
def aparams():
    return AnamorphicParams.for_domain(TEST_L)


@pytest.fixture(scope="module")
def keys(params):
    return EG_generate_keys(params)


@pytest.fixture(scope="module")
def akeys(params, keys):
    return AEG_generate_keys(TEST_L, params, keys.public_key)
