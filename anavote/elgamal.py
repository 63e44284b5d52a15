from dataclasses import dataclass
from typing import Tuple

from anavote.config import (
    RFC3526_P, RFC3526_Q, RFC3526_G,
    RFC5114_P, RFC5114_Q, RFC5114_G
)
from anavote.crypto_utils.algebra import mod_exp, mod_inv, mod_mul, random_below


@dataclass(frozen=True)
class GroupParams:
    """Paramètres du groupe : module premier p, ordre q et générateur g"""
    p: int
    q: int
    g: int

    def validate(self) -> bool:
        """
        Vérifie que les paramètres du groupe sont cohérents

        La primalité de p n'est pas testée : elle reste à la charge de l'appelant.
        """
        if self.p < 3 or self.q < 2:
            return False

        # Vérifie que g est un élément valide
        if self.g <= 1 or self.g >= self.p:
            return False

        # Vérifie que g^q ≡ 1 (mod p)
        return pow(self.g, self.q, self.p) == 1


@dataclass(frozen=True)
class KeyPair:
    """Paire de clés ElGamal (la clé privée ne quitte jamais son propriétaire)"""
    private_key: int
    public_key: int


DEFAULT_PARAMS = GroupParams(RFC3526_P, RFC3526_Q, RFC3526_G)
RFC5114_PARAMS = GroupParams(RFC5114_P, RFC5114_Q, RFC5114_G)


def _random_exponent(params: GroupParams) -> int:
    # 0 est remplacé par 1 pour éviter la clé (ou l'aléa) neutre
    k = random_below(params.q)
    return k if k != 0 else 1


def EG_generate_keys(params: GroupParams = DEFAULT_PARAMS) -> KeyPair:
    """
    Génère une paire de clés ElGamal

    Args:
        params: Les paramètres du groupe

    Returns:
        KeyPair: (clé privée dans [1, q-1], clé publique g^x mod p)

    Raises:
        RandomnessUnavailable: Si la source d'aléa échoue
    """
    private_key = _random_exponent(params)

    # Calcule la clé publique h = g^x mod p
    public_key = mod_exp(params.g, private_key, params.p)

    return KeyPair(private_key, public_key)


def EG_encrypt(params: GroupParams, public_key: int, message: int) -> Tuple[int, int, int]:
    """
    Chiffre un message avec ElGamal (version multiplicative)

    Args:
        params: Les paramètres du groupe
        public_key: La clé publique du destinataire
        message: Le message dans [0, p)

    Returns:
        Tuple[int, int, int]: (c0, c1, r) où r est l'aléa utilisé
    """
    r = _random_exponent(params)

    # Calcule c1 = g^r mod p
    c1 = mod_exp(params.g, r, params.p)

    # Calcule c0 = m * y^r mod p
    c0 = mod_mul(message, mod_exp(public_key, r, params.p), params.p)

    return c0, c1, r


def EG_decrypt(params: GroupParams, private_key: int, c0: int, c1: int) -> int:
    """
    Déchiffre un chiffré ElGamal

    Args:
        params: Les paramètres du groupe
        private_key: La clé privée
        c0, c1: Le texte chiffré

    Returns:
        int: Le message déchiffré

    Raises:
        NoModularInverse: Si c1^x n'est pas inversible (invariant interne violé)
    """
    # Calcule s = c1^x mod p
    s = mod_exp(c1, private_key, params.p)

    # Calcule m = c0 * s^(-1) mod p
    return mod_mul(c0, mod_inv(s, params.p), params.p)
