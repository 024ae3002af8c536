from __future__ import annotations

from enum import Enum


class PlayerId(Enum):
    """One of the two players."""
    FIRST = 0
    SECOND = 1

    @property
    def index(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return "First" if self is PlayerId.FIRST else "Second"

    def other(self) -> PlayerId:
        return PlayerId.SECOND if self is PlayerId.FIRST else PlayerId.FIRST

    @classmethod
    def of_index(cls, idx: int) -> PlayerId:
        if idx not in (0, 1):
            raise ValueError(f"PlayerId.of_index({idx}): this is a two player game")
        return cls(idx)


class GamePhase(Enum):
    """Where the game is in its round lifecycle."""
    SETUP = "setup"  # Constructed, hands not dealt yet
    PLAYING = "playing"
    ROUND_OVER = "round_over"  # Round evaluated, no winner, waiting for reset
    GAME_OVER = "game_over"


class ActionType(Enum):
    """The four actions a player takes exactly once per round."""
    SECRET = "secret"
    DISCARD = "discard"
    GIFT = "gift"
    COMPETITION = "competition"
