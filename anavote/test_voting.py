"""
Vote masqué : chaque votant publie v_i + r_i - (somme des parts reçues). Comme
chaque r_j est découpé en parts distribuées à tous les votants, la somme des
masques vaut 0 et le total déchiffré est la somme des votes encodés.
"""

import pytest
from pydantic import ValidationError

from anavote.anamorphic import AEG_encrypt
from anavote.config import ElectionConfig
from anavote.elgamal import EG_encrypt, RFC5114_PARAMS
from anavote import voting
from anavote.models import Ciphertext
from anavote.voting import (
    VotingSystem, check_capacity, compute_blinded_vote, decode_counts, determine_winner,
    encode_vote, run_election, split_secret, tally_votes
)

SMALL = dict(domain_size=128, blinding_low=50, blinding_high=100)


def test_encode_vote():
    assert encode_vote(0, 6) == 0
    assert encode_vote(-3, 6) == 0
    assert encode_vote(1, 6) == 1
    assert encode_vote(3, 6) == 36


def test_encode_decode_inverse():
    choices = [1, 1, 3, 8, 8, 8, 5, 2, 1]
    expected = [choices.count(c) for c in range(1, 9)]
    total = sum(encode_vote(c, 6) for c in choices)
    assert decode_counts(total, 8, 6) == expected


@pytest.mark.parametrize("value,n", [(0, 1), (0, 4), (17, 1), (17, 5), (9999, 10), (2 ** 200, 3)])
def test_split_secret_sum(value, n):
    shares = split_secret(value, n)
    assert len(shares) == n
    assert sum(shares) == value
    assert all(s >= 0 for s in shares)


def test_split_secret_invalid():
    with pytest.raises(ValueError):
        split_secret(10, 0)
    with pytest.raises(ValueError):
        split_secret(-1, 3)


def test_blinding_cancels():
    L, base, n = 1000, 6, 5
    choices = [1, 2, 2, 4, 0]
    randomness = [5000 + 123 * i for i in range(n)]

    received = [[] for _ in range(n)]
    for r in randomness:
        for j, share in enumerate(split_secret(r, n)):
            received[j].append(share)

    # Les masques s'annulent exactement
    assert sum(r - sum(shares) for r, shares in zip(randomness, received)) == 0

    blinded = [compute_blinded_vote(c, r, base, shares, L)
               for c, r, shares in zip(choices, randomness, received)]
    assert sum(blinded) % L == sum(encode_vote(c, base) for c in choices) % L


def test_determine_winner_ties():
    assert determine_winner(1 + 6 + 36, 6, 3) == 1
    assert determine_winner(6 + 6 + 36, 6, 3) == 2
    assert determine_winner(0, 6, 4) == 1


def test_check_capacity():
    assert check_capacity(3, 3, 4, 100)
    assert not check_capacity(3, 3, 3, 100)
    assert not check_capacity(5, 8, 6, 100000)


def test_tally_skips_foreign_ciphertexts(params, aparams, keys, akeys):
    votes = []
    for b in (1, 1, 36, aparams.L - 2):
        c0, c1, _ = AEG_encrypt(aparams, params, akeys.symmetric_key, keys.public_key, 7, b)
        votes.append((c0, c1))
    c0, c1, _ = EG_encrypt(params, keys.public_key, 7)
    votes.insert(1, (c0, c1))

    # 1 + 1 + 36 - 2 = 36
    total = tally_votes(aparams, params, akeys.symmetric_key, akeys.reverse_table, votes)
    assert total == 36


def test_three_voter_election():
    config = ElectionConfig(num_voters=3, num_candidates=8, base=6, **SMALL)
    counts, winner = run_election(config, RFC5114_PARAMS, choices=[1, 1, 3])
    assert counts == [2, 0, 1, 0, 0, 0, 0, 0]
    assert winner == 1


def test_voting_system_lifecycle():
    config = ElectionConfig(num_voters=4, num_candidates=3, **SMALL)
    system = VotingSystem(config, RFC5114_PARAMS)
    voters = system.register_voters()
    assert list(voters) == ["user1", "user2", "user3", "user4"]

    with pytest.raises(ValueError):
        system.cast_vote("user1", 1)

    system.distribute_shares()
    for voter in voters.values():
        assert config.blinding_low <= voter.r < config.blinding_high
        assert len(voter.shares) == 4

    with pytest.raises(ValueError):
        system.register_voters(1)

    for voter_id, candidate in zip(voters, [2, 0, 2, 3]):
        ciphertext = system.cast_vote(voter_id, candidate)
        assert isinstance(ciphertext, Ciphertext)

    with pytest.raises(ValueError):
        system.cast_vote("user1", 1)
    with pytest.raises(ValueError):
        system.cast_vote("user9", 1)

    assert len(system.collector.votes) == 4
    assert system.results() == [0, 2, 1]
    assert system.winner() == 2


def test_invalid_candidate():
    config = ElectionConfig(num_voters=2, num_candidates=3, **SMALL)
    system = VotingSystem(config, RFC5114_PARAMS)
    system.register_voters()
    system.distribute_shares()
    with pytest.raises(ValueError):
        system.cast_vote("user1", 4)


def test_run_election_requires_one_choice_per_voter():
    config = ElectionConfig(num_voters=3, num_candidates=2, **SMALL)
    with pytest.raises(ValueError):
        run_election(config, RFC5114_PARAMS, choices=[1, 2])


def test_election_config():
    config = ElectionConfig(num_voters=5)
    assert config.vote_base == 6
    assert config.s == config.t == config.domain_size
    assert ElectionConfig(base=10, sampling_t=64).vote_base == 10

    with pytest.raises(ValidationError):
        ElectionConfig(blinding_low=10, blinding_high=10)
    with pytest.raises(ValidationError):
        ElectionConfig(num_voters=0)


def test_tally_requires_every_ballot():
    config = ElectionConfig(num_voters=3, num_candidates=3, **SMALL)
    system = VotingSystem(config, RFC5114_PARAMS)
    system.register_voters()
    system.distribute_shares()
    system.cast_vote("user1", 1)
    system.cast_vote("user2", 1)

    with pytest.raises(ValueError):
        system.tally()
    with pytest.raises(ValueError):
        system.results()
    with pytest.raises(ValueError):
        system.winner()

    system.cast_vote("user3", 0)
    assert system.results() == [2, 0, 0]
    assert system.winner() == 1


def test_tally_decrypts_once(monkeypatch):
    config = ElectionConfig(num_voters=2, num_candidates=2, **SMALL)
    system = VotingSystem(config, RFC5114_PARAMS)
    system.register_voters()
    system.distribute_shares()
    system.cast_vote("user1", 2)
    system.cast_vote("user2", 2)

    calls = []
    real_tally = voting.tally_votes

    def counting_tally(*args):
        calls.append(args)
        return real_tally(*args)

    monkeypatch.setattr(voting, "tally_votes", counting_tally)
    assert system.results() == [0, 2]
    assert system.winner() == 2
    assert len(calls) == 1
