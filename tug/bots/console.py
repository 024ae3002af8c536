"""
Console Strategy - A human player typing moves.

Moves are one line each, naming card values (place indexes 0-6):

    secret 3
    discard 0 4
    gift 1 2 6           keep 1 and 2, give 6
    competition 5 5      commit two 5s; the opponent adds their pair

Single-letter forms (s, d, g, c) work too. Input and output functions
are injectable so the adapter can be driven from tests.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Callable

from ..engine_core.action import CARD_COUNTS
from ..engine_core.types import ActionType
from .policy import BotDecision, Strategy

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState
    from ..engine_core.types import PlayerId


COMMANDS = {
    "s": ActionType.SECRET,
    "secret": ActionType.SECRET,
    "d": ActionType.DISCARD,
    "discard": ActionType.DISCARD,
    "g": ActionType.GIFT,
    "gift": ActionType.GIFT,
    "c": ActionType.COMPETITION,
    "competition": ActionType.COMPETITION,
}


def parse_command(line: str) -> tuple[ActionType, tuple[int, ...], tuple[int, ...]]:
    """
    Parse a typed move into (action type, own values, other values).

    For Competition the other values are always empty: the opponent
    chooses them.
    """
    parts = line.strip().lower().split()
    if not parts:
        raise ValueError("Empty move")
    action_type = COMMANDS.get(parts[0])
    if action_type is None:
        raise ValueError(f"Unknown action '{parts[0]}'")

    try:
        values = tuple(int(p) for p in parts[1:])
    except ValueError:
        raise ValueError("Card values must be numbers") from None

    own_count, other_count = CARD_COUNTS[action_type]
    if action_type == ActionType.COMPETITION:
        other_count = 0
    if len(values) != own_count + other_count:
        raise ValueError(f"{action_type.value} takes {own_count + other_count} card value(s)")
    return action_type, values[:own_count], values[own_count:]


class ConsoleStrategy(Strategy):
    """Reads moves from a person at a terminal."""

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
        max_attempts: int = 20,
    ):
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print
        self.max_attempts = max_attempts

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        self.output_fn(state.view_for(state.current_player).render())

        for _ in range(self.max_attempts):
            line = self.input_fn("Your move> ")
            try:
                action_type, own, other = parse_command(line)
            except ValueError as e:
                self.output_fn(f"Invalid move: {e}")
                continue

            action = self._match(action_type, own, other, legal_actions)
            if action is None:
                self.output_fn("That move is not available with your cards")
                continue
            return BotDecision(action=action, explanation="Entered at console")

        raise ValueError("Too many invalid moves")

    def assign_competition(
        self,
        state: GameState,
        player: PlayerId,
        offered: tuple[int, int],
    ) -> tuple[int, int]:
        hand = state.hand_values(player)
        self.output_fn(f"Opponent plays competition with {offered[0]} {offered[1]}")
        self.output_fn(f"Your hand: {' '.join(str(v) for v in sorted(hand))}")

        for _ in range(self.max_attempts):
            line = self.input_fn("Pick two of your cards> ")
            try:
                picks = [int(p) for p in line.split()]
            except ValueError:
                self.output_fn("Card values must be numbers")
                continue
            if len(picks) != 2:
                self.output_fn("Pick exactly two cards")
                continue
            remaining = list(hand)
            try:
                for value in picks:
                    remaining.remove(value)
            except ValueError:
                self.output_fn("You don't hold those cards")
                continue
            return (picks[0], picks[1])

        raise ValueError("Too many invalid picks")

    def _match(
        self,
        action_type: ActionType,
        own: tuple[int, ...],
        other: tuple[int, ...],
        legal_actions: list[Action],
    ) -> Action | None:
        own_key = tuple(sorted(own))
        for action in legal_actions:
            if action.action_type != action_type:
                continue
            if tuple(sorted(action.for_player)) != own_key:
                continue
            if action_type == ActionType.COMPETITION or action.for_other == other:
                return action
        return None
