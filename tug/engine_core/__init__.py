"""
Engine Core - Game state management and the action protocol.

The engine is the runtime that:
1. Builds and shuffles the deck
2. Manages GameState through the round lifecycle
3. Generates legal actions
4. Applies actions via the reducer
5. Evaluates control and the win conditions
"""

from .types import ActionType, GamePhase, PlayerId
from .cards import Card, build_deck, draw, shuffle
from .state import GameState, PlayerState, Place
from .action import Action, ActionResult
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions, is_legal
from .scoring import RoundResult, evaluate
from .view import PlayerView, PlaceView
from .errors import (
    TugError,
    ActionError,
    InvalidActionError,
    CardNotInHandError,
    ActionUnavailableError,
    NotPlayingError,
    GameOverError,
    EmptyDeckError,
    RoundInProgressError,
    SnapshotError,
)

__all__ = [
    "ActionType",
    "GamePhase",
    "PlayerId",
    "Card",
    "build_deck",
    "draw",
    "shuffle",
    "GameState",
    "PlayerState",
    "Place",
    "Action",
    "ActionResult",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
    "RoundResult",
    "evaluate",
    "PlayerView",
    "PlaceView",
    "TugError",
    "ActionError",
    "InvalidActionError",
    "CardNotInHandError",
    "ActionUnavailableError",
    "NotPlayingError",
    "GameOverError",
    "EmptyDeckError",
    "RoundInProgressError",
    "SnapshotError",
]
