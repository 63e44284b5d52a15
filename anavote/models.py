from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from anavote.anamorphic import AnamorphicKeys
from anavote.crypto_utils.algebra import byte_length, bytes_to_int, int_to_bytes
from anavote.elgamal import KeyPair


class Ciphertext(NamedTuple):
    """Chiffré (c0, c1), chaque composante étant un résidu modulo p"""
    c0: int
    c1: int

    def to_bytes(self, p: int) -> bytes:
        """Encode le chiffré en deux entiers big-endian de taille fixe"""
        if not 0 <= self.c0 < p or not 0 <= self.c1 < p:
            raise ValueError("Composante du chiffré hors de [0, p)")
        width = byte_length(p)
        return int_to_bytes(self.c0, width) + int_to_bytes(self.c1, width)

    @classmethod
    def from_bytes(cls, data: bytes, p: int) -> "Ciphertext":
        width = byte_length(p)
        if len(data) != 2 * width:
            raise ValueError(f"Chiffré de {len(data)} octets, {2 * width} attendus")
        c0 = bytes_to_int(data[:width])
        c1 = bytes_to_int(data[width:])
        if c0 >= p or c1 >= p:
            raise ValueError("Composante du chiffré hors de [0, p)")
        return cls(c0, c1)


@dataclass
class Voter:
    """Un votant : ses clés, son aléa de masquage et les parts reçues"""
    voter_id: str
    keys: KeyPair
    anamorphic_keys: AnamorphicKeys
    r: Optional[int] = None
    shares: List[int] = field(default_factory=list)
    candidate: Optional[int] = None
    blinded_vote: Optional[int] = None
    ciphertext: Optional[Ciphertext] = None


@dataclass
class VoteCollector:
    """Le collecteur : sa clé ElGamal, sa clé double et les chiffrés reçus"""
    keys: KeyPair
    anamorphic_keys: AnamorphicKeys
    votes: List[Ciphertext] = field(default_factory=list)

    def submit(self, ciphertext: Ciphertext) -> None:
        self.votes.append(Ciphertext(*ciphertext))
