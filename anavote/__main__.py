import argparse
import logging

from anavote.config import ElectionConfig
from anavote.elgamal import DEFAULT_PARAMS, RFC5114_PARAMS
from anavote.voting import run_election

GROUPS = {"rfc3526": DEFAULT_PARAMS, "rfc5114": RFC5114_PARAMS}


def main():
    parser = argparse.ArgumentParser(description="Élection avec ElGamal anamorphique")
    parser.add_argument("--voters", type=int, default=None, help="nombre de votants")
    parser.add_argument("--candidates", type=int, default=None, help="nombre de candidats")
    parser.add_argument("--domain-size", type=int, default=None, help="taille L du domaine caché")
    parser.add_argument("--group", choices=sorted(GROUPS), default="rfc3526")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    overrides = {
        "num_voters": args.voters,
        "num_candidates": args.candidates,
        "domain_size": args.domain_size,
    }
    config = ElectionConfig(**{k: v for k, v in overrides.items() if v is not None})

    counts, winner = run_election(config, GROUPS[args.group])

    print(f"Résultats de l'élection ({config.num_voters} votants, L = {config.domain_size}):")
    for i, count in enumerate(counts, 1):
        print(f"Candidat {i}: {count} votes")
    print(f"\nLe gagnant de l'élection est le candidat {winner}")


if __name__ == "__main__":
    main()
