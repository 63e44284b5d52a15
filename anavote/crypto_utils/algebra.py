from secrets import randbelow
from typing import Optional

from Crypto.Random import get_random_bytes

from anavote.errors import NoModularInverse, RandomnessUnavailable


def random_below(bound: int) -> int:
    """
    Tire un entier uniforme dans [0, bound) depuis une source cryptographique

    Raises:
        ValueError: Si la borne n'est pas strictement positive
        RandomnessUnavailable: Si la source d'entropie échoue
    """
    if bound <= 0:
        raise ValueError("La borne doit être strictement positive")
    try:
        return randbelow(bound)
    except OSError as e:
        raise RandomnessUnavailable(str(e)) from e


def random_bytes(n: int) -> bytes:
    """Tire n octets aléatoires (clé symétrique)"""
    try:
        return get_random_bytes(n)
    except OSError as e:
        raise RandomnessUnavailable(str(e)) from e


def mod_mul(a: int, b: int, m: int) -> int:
    return (a * b) % m


def mod_exp(a: int, e: int, m: int) -> int:
    return pow(a, e, m)


def mod_inv(a: int, m: int) -> int:
    """
    Calcule l'inverse de a modulo m

    Raises:
        NoModularInverse: Si a n'est pas inversible modulo m
    """
    try:
        return pow(a, -1, m)
    except ValueError:
        raise NoModularInverse(a, m) from None


def byte_length(n: int) -> int:
    """Nombre d'octets nécessaires pour représenter un résidu modulo n"""
    return max(1, ((n - 1).bit_length() + 7) // 8)


def int_to_bytes(n: int, length: Optional[int] = None) -> bytes:
    """Convertit un entier en octets big-endian (taille fixe si length est donné)"""
    if length is None:
        length = max(1, (n.bit_length() + 7) // 8)
    return n.to_bytes(length, "big")


def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, "big")
