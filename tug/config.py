from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Callable, Sequence

from .bots import FirstLegalStrategy, GreedyStrategy, RandomStrategy, Strategy


def _random(seed: int | None) -> Strategy:
    return RandomStrategy(seed=seed)


def _first_legal(seed: int | None) -> Strategy:
    return FirstLegalStrategy()


def _greedy(seed: int | None) -> Strategy:
    return GreedyStrategy()


# name -> factory(seed)
STRATEGIES: dict[str, Callable[[int | None], Strategy]] = {
    "random": _random,
    "first": _first_legal,
    "greedy": _greedy,
}


def make_strategy(name: str, seed: int | None = None) -> Strategy:
    try:
        factory = STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown strategy '{name}' (choose from {', '.join(sorted(STRATEGIES))})") from None
    return factory(seed)


@dataclass
class SimulationConfig:
    seed: int = 42
    games: int = 25
    first: str = "greedy"
    second: str = "random"
    max_rounds: int = 50

    # Progress printing
    progress_every: int = 5
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tug - two-player card allocation game engine",
        prog="tug",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    sim = subparsers.add_parser("simulate", help="Run bot-vs-bot games")
    sim.add_argument("--games", type=int, default=25)
    sim.add_argument("--seed", type=int, default=42)
    sim.add_argument("--first", choices=sorted(STRATEGIES), default="greedy")
    sim.add_argument("--second", choices=sorted(STRATEGIES), default="random")
    sim.add_argument("--max-rounds", type=int, default=50)
    sim.add_argument("--progress-every", type=int, default=5)
    sim.add_argument("--verbose", "-v", action="store_true", help="Print every turn")

    play = subparsers.add_parser("play", help="Play against a bot at the console")
    play.add_argument("--seed", type=int, default=None)
    play.add_argument("--opponent", choices=sorted(STRATEGIES), default="greedy")
    play.add_argument("--second", action="store_true", help="Take the second seat")
    play.add_argument("--max-rounds", type=int, default=50)

    return parser


def build_config_from_cli(argv: Sequence[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = None
    if args.command == "simulate":
        cfg = SimulationConfig(
            seed=args.seed,
            games=args.games,
            first=args.first,
            second=args.second,
            max_rounds=args.max_rounds,
            progress_every=args.progress_every,
            verbose=args.verbose,
        )
    return cfg, args
