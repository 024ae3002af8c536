"""
Engine errors.

Every failure the engine reports is a TugError. Errors caused by a
driver submitting an illegal action are ActionErrors and carry a
stable ``code`` so callers can branch on them without parsing messages.
"""

from __future__ import annotations


class TugError(Exception):
    """Base class for all engine errors."""


class EmptyDeckError(TugError):
    """Raised when drawing from an empty deck."""


class RoundInProgressError(TugError):
    """Raised when reset() is called while a round is still being played."""


class SnapshotError(TugError):
    """Raised when snapshot data cannot be decoded into a valid state."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        super().__init__(message)


class ActionError(TugError):
    """Raised when an action cannot be applied to the current state."""
    code = "INVALID_ACTION"


class InvalidActionError(ActionError):
    """The action payload is malformed (wrong card count, bad value)."""
    code = "INVALID_ACTION"


class CardNotInHandError(ActionError):
    """A named card value is not in the hand it must come from."""
    code = "CARD_NOT_IN_HAND"

    def __init__(self, value: int, player_name: str):
        self.value = value
        self.player_name = player_name
        super().__init__(f"Card {value} not in {player_name}'s hand")


class ActionUnavailableError(ActionError):
    """The player already used this action type in the current round."""
    code = "ACTION_UNAVAILABLE"


class NotPlayingError(ActionError):
    """No round is in progress (hands not dealt, or waiting for reset)."""
    code = "NOT_PLAYING"


class GameOverError(ActionError):
    """The game already has a winner."""
    code = "GAME_OVER"
