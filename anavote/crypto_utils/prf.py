"""
Fonction pseudo-aléatoire F(K, x, y) construite sur AES-128.

Le bloc d'entrée est x || y, chacun sur 8 octets little-endian. La sortie AES
est relue comme un entier little-endian puis réduite modulo p. Le même ordre
d'octets doit être utilisé au chiffrement et au déchiffrement : la moindre
asymétrie corrompt silencieusement le décodage.
"""

from Crypto.Cipher import AES

KEY_SIZE = 16
HALF_BLOCK = 8
MAX_INPUT = 1 << (8 * HALF_BLOCK)


def encode_block(x: int, y: int) -> bytes:
    """Sérialise (x, y) en un bloc de 16 octets"""
    if not 0 <= x < MAX_INPUT or not 0 <= y < MAX_INPUT:
        raise ValueError("x et y doivent tenir sur 8 octets")
    return x.to_bytes(HALF_BLOCK, "little") + y.to_bytes(HALF_BLOCK, "little")


class PRF:
    """F sous une clé fixée, le chiffreur AES étant créé une seule fois"""

    def __init__(self, key: bytes, p: int):
        if len(key) != KEY_SIZE:
            raise ValueError("La clé doit faire 16 octets")
        self.p = p
        self._cipher = AES.new(key, AES.MODE_ECB)

    def __call__(self, x: int, y: int) -> int:
        out = self._cipher.encrypt(encode_block(x, y))
        return int.from_bytes(out, "little") % self.p


def F(key: bytes, x: int, y: int, p: int) -> int:
    """
    Évalue F(key, x, y) dans [0, p)

    Args:
        key: Clé symétrique de 16 octets
        x, y: Petits entiers positifs (< 2^64)
        p: Le module du groupe

    Returns:
        int: Entier pseudo-aléatoire dans [0, p)
    """
    return PRF(key, p)(x, y)
