"""
ElGamal anamorphique.

Un chiffré anamorphique est un chiffré ElGamal ordinaire du message de
couverture, mais son aléa r est choisi de sorte que r = m' + F(K, x, y) mod q,
où m' est le message caché et y = (g^r mod p) mod T. Le détenteur de K retrouve
y depuis c1, essaie tous les x possibles et reconnaît g^m' dans la table inverse.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from anavote.config import ATTEMPTS_FACTOR
from anavote.crypto_utils.algebra import (
    byte_length, int_to_bytes, mod_exp, mod_inv, mod_mul, random_below, random_bytes
)
from anavote.crypto_utils.prf import KEY_SIZE, MAX_INPUT, PRF
from anavote.elgamal import GroupParams
from anavote.errors import (
    AnamorphicDecodeNotFound, AnamorphicEncodingExhausted, NoModularInverse
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnamorphicParams:
    """
    Paramètres anamorphiques

    L: taille du domaine du message caché
    S: borne de tirage de x
    T: borne de tirage de y, et module du test d'acceptation
    max_attempts: garde de la boucle de rejet (100 * T par défaut)
    """
    L: int
    S: int
    T: int
    max_attempts: Optional[int] = None

    def __post_init__(self):
        if self.L < 1:
            raise ValueError("L doit être strictement positif")
        if not 1 <= self.S <= MAX_INPUT or not 1 <= self.T <= MAX_INPUT:
            raise ValueError("S et T doivent être dans [1, 2^64]")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts doit être strictement positif")

    @classmethod
    def for_domain(cls, L: int, max_attempts: Optional[int] = None) -> "AnamorphicParams":
        """Cas usuel S = T = L"""
        return cls(L, L, L, max_attempts)

    @property
    def attempt_limit(self) -> int:
        if self.max_attempts is not None:
            return self.max_attempts
        return ATTEMPTS_FACTOR * self.T


@dataclass
class AnamorphicKeys:
    """Clé double : clé symétrique K et table inverse g^i -> i"""
    symmetric_key: bytes
    reverse_table: Dict[bytes, int] = field(repr=False)
    domain_size: int


def table_key(value: int, params: GroupParams) -> bytes:
    """Encodage de taille fixe d'un élément du groupe, clé de la table inverse"""
    return int_to_bytes(value, byte_length(params.p))


def AEG_generate_keys(L: int, params: GroupParams, public_key: Optional[int] = None) -> AnamorphicKeys:
    """
    Génère la clé double anamorphique

    Le coût est linéaire en L, tout comme celui du déchiffrement.

    Args:
        L: Taille du domaine du message caché
        params: Les paramètres du groupe
        public_key: Clé publique associée (non utilisée par la construction)

    Returns:
        AnamorphicKeys: La clé symétrique et la table inverse
    """
    if L < 1:
        raise ValueError("L doit être strictement positif")

    symmetric_key = random_bytes(KEY_SIZE)

    # table[g^i mod p] = i, calculée par multiplications successives
    table = {}
    value = 1
    for i in range(L):
        table[table_key(value, params)] = i
        value = mod_mul(value, params.g, params.p)

    return AnamorphicKeys(symmetric_key, table, L)


def AEG_encrypt(aparams: AnamorphicParams, params: GroupParams, symmetric_key: bytes,
                public_key: int, cover_message: int, hidden_message: int) -> Tuple[int, int, int]:
    """
    Chiffre anamorphiquement : le chiffré déchiffre en cover_message avec la
    clé privée, et révèle hidden_message avec la clé symétrique

    Args:
        aparams: Les paramètres anamorphiques
        params: Les paramètres du groupe
        symmetric_key: La clé symétrique K
        public_key: La clé publique du destinataire
        cover_message: Le message de couverture dans [0, p)
        hidden_message: Le message caché dans [0, L)

    Returns:
        Tuple[int, int, int]: (c0, c1, r)

    Raises:
        ValueError: Si le message caché sort du domaine
        AnamorphicEncodingExhausted: Si aucun tirage n'est accepté à temps
    """
    if not 0 <= hidden_message < aparams.L:
        raise ValueError("Message caché hors du domaine [0, L)")

    prf = PRF(symmetric_key, params.p)
    limit = aparams.attempt_limit

    for attempt in range(1, limit + 1):
        x = random_below(aparams.S)
        y = random_below(aparams.T)

        # r = (m' + F(K, x, y)) mod q
        t = prf(x, y)
        r = (hidden_message + t) % params.q

        # Accepte si d(g^r) = y
        c1 = mod_exp(params.g, r, params.p)
        if c1 % aparams.T == y:
            logger.debug("Échantillon accepté après %d tentatives", attempt)
            c0 = mod_mul(cover_message, mod_exp(public_key, r, params.p), params.p)
            return c0, c1, r

    raise AnamorphicEncodingExhausted(limit)


def AEG_decrypt(aparams: AnamorphicParams, params: GroupParams, symmetric_key: bytes,
                reverse_table: Dict[bytes, int], c0: int, c1: int) -> int:
    """
    Retrouve le message caché par recherche exhaustive sur x dans [0, S)

    Returns:
        int: Le message caché

    Raises:
        AnamorphicDecodeNotFound: Si aucun x ne donne d'élément de la table
    """
    prf = PRF(symmetric_key, params.p)
    y = c1 % aparams.T

    for x in range(aparams.S):
        t = prf(x, y)
        try:
            inv = mod_inv(mod_exp(params.g, t, params.p), params.p)
        except NoModularInverse:
            continue

        # s = c1 / g^t = g^m'
        s = mod_mul(c1, inv, params.p)
        index = reverse_table.get(table_key(s, params))
        if index is not None:
            return index

    raise AnamorphicDecodeNotFound("Aucun message caché trouvé dans ce chiffré")


def AEG_try_decrypt(aparams: AnamorphicParams, params: GroupParams, symmetric_key: bytes,
                    reverse_table: Dict[bytes, int], c0: int, c1: int) -> Optional[int]:
    """Comme AEG_decrypt, mais renvoie None si rien n'est trouvé"""
    try:
        return AEG_decrypt(aparams, params, symmetric_key, reverse_table, c0, c1)
    except AnamorphicDecodeNotFound:
        return None
