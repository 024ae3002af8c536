"""
Session Module - Drives games between strategies.

A session is one play-through:
- Created from a fresh GameState
- Asks each side's strategy for moves in turn
- Ends when a player wins or the round limit is reached
"""

from .game_loop import (
    GameLoop,
    GameRecord,
    LoopState,
    StrategyError,
    TurnResult,
    play_game,
)

__all__ = [
    "GameLoop",
    "GameRecord",
    "LoopState",
    "StrategyError",
    "TurnResult",
    "play_game",
]
