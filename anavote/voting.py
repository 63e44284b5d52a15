import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from anavote.anamorphic import (
    AnamorphicParams, AEG_generate_keys, AEG_encrypt, AEG_try_decrypt
)
from anavote.config import ElectionConfig
from anavote.crypto_utils.algebra import random_below
from anavote.elgamal import DEFAULT_PARAMS, EG_generate_keys, GroupParams
from anavote.models import Ciphertext, VoteCollector, Voter

logger = logging.getLogger(__name__)


def encode_vote(candidate: int, base: int) -> int:
    """Encode un vote (candidat numéroté à partir de 1) en base^(candidat-1)"""
    if candidate <= 0:
        return 0
    return base ** (candidate - 1)


def decode_counts(total: int, num_candidates: int, base: int) -> List[int]:
    """Extrait le nombre de voix de chaque candidat, chiffre de poids faible en premier"""
    counts = []
    for _ in range(num_candidates):
        counts.append(total % base)
        total //= base
    return counts


def split_secret(value: int, n: int) -> List[int]:
    """
    Découpe un secret en n parts additives

    Les n-1 premières parts sont tirées dans [0, reste] ; la dernière est le
    reste, de sorte que la somme vaut exactement value (sans réduction modulaire).

    Args:
        value: Le secret (positif ou nul)
        n: Le nombre de parts

    Returns:
        List[int]: Les n parts
    """
    if n < 1:
        raise ValueError("Il faut au moins une part")
    if value < 0:
        raise ValueError("Le secret doit être positif ou nul")

    parts = []
    remaining = value
    for _ in range(n - 1):
        share = random_below(remaining + 1)
        parts.append(share)
        remaining -= share
    parts.append(remaining)
    return parts


def compute_blinded_vote(candidate: int, r: int, base: int, shares: Iterable[int], L: int) -> int:
    """Vote masqué : (encode(v) + r - somme des parts reçues) mod L"""
    return (encode_vote(candidate, base) + r - sum(shares)) % L


def distribute_shares(voters: Dict[str, Voter], low: int, high: int) -> None:
    """
    Tire l'aléa r_i de chaque votant dans [low, high) et le découpe en parts,
    la j-ième part allant au j-ième votant (l'émetteur compris)
    """
    if low >= high:
        raise ValueError("L'intervalle [low, high) est vide")
    if any(v.r is not None for v in voters.values()):
        raise ValueError("Les parts ont déjà été distribuées")

    receivers = list(voters.values())
    for sender in receivers:
        sender.r = low + random_below(high - low)
        for receiver, share in zip(receivers, split_secret(sender.r, len(receivers))):
            receiver.shares.append(share)


def tally_votes(aparams: AnamorphicParams, params: GroupParams, symmetric_key: bytes,
                reverse_table: Dict[bytes, int], votes: Iterable[Tuple[int, int]]) -> int:
    """
    Déchiffre les votes masqués et les additionne

    Les chiffrés illisibles sont ignorés. Chaque valeur b est relue comme un
    entier signé dans [-L/2, L/2) avant d'être sommée ; le total est ramené
    dans [0, L).

    Returns:
        int: Le total des votes encodés modulo L
    """
    L = aparams.L
    half = L // 2
    total = 0
    for c0, c1 in votes:
        b = AEG_try_decrypt(aparams, params, symmetric_key, reverse_table, c0, c1)
        if b is None:
            logger.warning("Chiffré ignoré : aucun vote caché trouvé")
            continue

        # Représentation signée
        if b > half:
            b -= L
        total += b

    return total % L


def determine_winner(total: int, base: int, num_candidates: int) -> int:
    """Renvoie le candidat (numéroté à partir de 1) ayant le plus de voix"""
    counts = decode_counts(total, num_candidates, base)
    for i, count in enumerate(counts, 1):
        logger.info("Candidat %2d : %d voix", i, count)

    # max() garde la première occurrence en cas d'égalité
    best = max(range(num_candidates), key=lambda i: counts[i])
    return best + 1


def check_capacity(num_voters: int, num_candidates: int, base: int, L: int) -> bool:
    """
    Vérifie que le dépouillement modulo L est exact : la base doit dépasser le
    nombre de votants et le plus grand total possible doit rester sous L
    """
    if base <= num_voters:
        return False
    return num_voters * base ** (num_candidates - 1) < L


class VotingSystem:
    def __init__(self, config: Optional[ElectionConfig] = None, params: GroupParams = DEFAULT_PARAMS):
        """
        Initialise le système de vote

        Args:
            config: Les paramètres de l'élection
            params: Les paramètres du groupe
        """
        self.config = config or ElectionConfig()
        self.params = params
        self.base = self.config.vote_base
        self.aparams = AnamorphicParams(
            self.config.domain_size, self.config.s, self.config.t, self.config.max_attempts
        )

        if not check_capacity(self.config.num_voters, self.config.num_candidates,
                              self.base, self.aparams.L):
            logger.warning(
                "L=%d trop petit pour %d votants, %d candidats en base %d : "
                "le résultat peut être faux",
                self.aparams.L, self.config.num_voters, self.config.num_candidates, self.base
            )

        # Clés du collecteur
        keys = EG_generate_keys(params)
        self.collector = VoteCollector(
            keys, AEG_generate_keys(self.aparams.L, params, keys.public_key)
        )
        self.voters: Dict[str, Voter] = {}
        self._total: Optional[int] = None

    def register_voters(self, number: Optional[int] = None) -> Dict[str, Voter]:
        """Crée les votants avec leurs clés ElGamal et anamorphiques"""
        if number is None:
            number = self.config.num_voters
        if any(v.r is not None for v in self.voters.values()):
            raise ValueError("Inscription impossible après la distribution des parts")
        start = len(self.voters)
        for i in range(start, start + number):
            voter_id = f"user{i + 1}"
            keys = EG_generate_keys(self.params)
            akeys = AEG_generate_keys(self.aparams.L, self.params, keys.public_key)
            self.voters[voter_id] = Voter(voter_id, keys, akeys)
        return self.voters

    def distribute_shares(self) -> None:
        distribute_shares(self.voters, self.config.blinding_low, self.config.blinding_high)

    def cast_vote(self, voter_id: str, candidate: int) -> Ciphertext:
        """
        Masque le vote, le chiffre anamorphiquement sous la clé du collecteur et
        le dépose. Le candidat 0 est un vote blanc, qui doit tout de même être
        déposé pour que les masques s'annulent.
        """
        voter = self.voters.get(voter_id)
        if voter is None:
            raise ValueError(f"Votant inconnu : {voter_id}")
        if not 0 <= candidate <= self.config.num_candidates:
            raise ValueError("Candidat invalide")
        if voter.r is None:
            raise ValueError("Les parts n'ont pas été distribuées")
        if voter.ciphertext is not None:
            raise ValueError(f"{voter_id} a déjà voté")

        voter.candidate = candidate
        voter.blinded_vote = compute_blinded_vote(
            candidate, voter.r, self.base, voter.shares, self.aparams.L
        )

        c0, c1, _ = AEG_encrypt(
            self.aparams, self.params, self.collector.anamorphic_keys.symmetric_key,
            self.collector.keys.public_key, self.config.cover_message, voter.blinded_vote
        )
        voter.ciphertext = Ciphertext(c0, c1)
        self.collector.submit(voter.ciphertext)
        return voter.ciphertext

    def tally(self) -> int:
        """
        Dépouille les bulletins déposés (une seule fois)

        Raises:
            ValueError: Si un votant inscrit n'a pas voté, les masques ne
                s'annulant alors plus
        """
        missing = [v.voter_id for v in self.voters.values() if v.ciphertext is None]
        if missing or len(self.collector.votes) != len(self.voters):
            raise ValueError(f"Dépouillement impossible, bulletins manquants : {missing}")

        if self._total is None:
            akeys = self.collector.anamorphic_keys
            self._total = tally_votes(self.aparams, self.params, akeys.symmetric_key,
                                      akeys.reverse_table, self.collector.votes)
        return self._total

    def results(self) -> List[int]:
        return decode_counts(self.tally(), self.config.num_candidates, self.base)

    def winner(self) -> int:
        return determine_winner(self.tally(), self.base, self.config.num_candidates)


def run_election(config: Optional[ElectionConfig] = None, params: GroupParams = DEFAULT_PARAMS,
                 choices: Optional[Sequence[int]] = None) -> Tuple[List[int], int]:
    """
    Exécute une élection complète

    Args:
        config: Les paramètres de l'élection
        params: Les paramètres du groupe
        choices: Le candidat de chaque votant (tirés au hasard si absent)

    Returns:
        Tuple[List[int], int]: (voix par candidat, gagnant)
    """
    config = config or ElectionConfig()
    if choices is None:
        choices = [random_below(config.num_candidates) + 1 for _ in range(config.num_voters)]
    if len(choices) != config.num_voters:
        raise ValueError("Il faut un choix par votant")

    system = VotingSystem(config, params)
    system.register_voters()
    system.distribute_shares()

    for voter_id, candidate in zip(system.voters, choices):
        system.cast_vote(voter_id, candidate)

    total = system.tally()
    counts = decode_counts(total, config.num_candidates, system.base)
    return counts, determine_winner(total, system.base, config.num_candidates)
