"""
Tug CLI - Command-line interface for the engine.

Usage:
    tug simulate [--games N] [--seed S] [--first greedy] [--second random]
    tug play [--seed S] [--opponent greedy] [--second]
"""

import sys

from .bots import ConsoleStrategy
from .config import SimulationConfig, build_config_from_cli, build_parser, make_strategy
from .engine_core.state import GameState
from .engine_core.types import ActionType, PlayerId
from .session import GameLoop, LoopState, play_game


def main(argv=None):
    """Main CLI entry point."""
    cfg, args = build_config_from_cli(argv)

    if args.command == "simulate":
        return cmd_simulate(cfg)
    elif args.command == "play":
        return cmd_play(args)
    else:
        build_parser().print_help()
        return 1


def cmd_simulate(cfg: SimulationConfig) -> int:
    """Run bot-vs-bot games and print the results."""
    wins = {PlayerId.FIRST: 0, PlayerId.SECOND: 0}
    unfinished = 0
    total_rounds = 0

    print(f"Simulating {cfg.games} game(s): {cfg.first} (First) vs {cfg.second} (Second)")
    for game_idx in range(cfg.games):
        game_seed = cfg.seed + game_idx
        record = play_game(
            make_strategy(cfg.first, seed=game_seed * 2),
            make_strategy(cfg.second, seed=game_seed * 2 + 1),
            seed=game_seed,
            max_rounds=cfg.max_rounds,
        )
        total_rounds += record.rounds
        if record.winner is None:
            unfinished += 1
        else:
            wins[record.winner] += 1

        if cfg.verbose:
            print(f"--- game {game_idx + 1} (seed {game_seed}) ---")
            for line in record.events:
                print(f"  {line}")
        if cfg.progress_every and (game_idx + 1) % cfg.progress_every == 0:
            print(f"  ... {game_idx + 1}/{cfg.games} games played")

    print(f"First ({cfg.first}) wins:  {wins[PlayerId.FIRST]}")
    print(f"Second ({cfg.second}) wins: {wins[PlayerId.SECOND]}")
    if unfinished:
        print(f"Stopped at round limit: {unfinished}")
    if cfg.games:
        print(f"Average rounds per game: {total_rounds / cfg.games:.2f}")
    return 0


def cmd_play(args) -> int:
    """Play against a bot at the console."""
    human = PlayerId.SECOND if args.second else PlayerId.FIRST
    bot = make_strategy(args.opponent, seed=args.seed)
    strategies = [None, None]
    strategies[human.index] = ConsoleStrategy()
    strategies[human.other().index] = bot

    loop = GameLoop(GameState.new(seed=args.seed), strategies, max_rounds=args.max_rounds)
    print(f"You are {human.label}; your opponent is {bot.get_name()}.")

    try:
        while loop.loop_state == LoopState.WAITING_ACTION:
            turn = loop.step()
            if turn.player != human and turn.action.action_type in (ActionType.SECRET, ActionType.DISCARD):
                # Hidden from the other player
                print(f"{turn.player.label}: {turn.action.action_type.value}")
                for line in turn.state_changes[1:]:
                    print(line)
            else:
                print("\n".join(turn.state_changes))
    except (KeyboardInterrupt, EOFError):
        print("\nGame abandoned.")
        return 1

    if loop.state.winner is None:
        print("Round limit reached without a winner.")
    elif loop.state.winner == human:
        print("You win!")
    else:
        print("You lose.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
