"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. Console play to check a typed move
3. Validation (is this action in legal_actions?)

Actions are generated over distinct card VALUES: two 2-cards in hand
give one "secret 2", not two.
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations
from typing import TYPE_CHECKING, Iterable

from .action import Action
from .types import ActionType, GamePhase

if TYPE_CHECKING:
    from .state import GameState


def distinct_pairs(values: Iterable[int]) -> list[tuple[int, int]]:
    """All distinct (sorted) value pairs that can be taken from a hand."""
    return sorted(set(combinations(sorted(values), 2)))


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the current player.

    Competition actions are generated for every pair the opponent could
    contribute; drivers that respect hidden information let the
    opponent pick that pair instead (see GameLoop).
    """

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects, grouped by
        action type in declaration order.
        """
        if state.phase != GamePhase.PLAYING:
            return []

        hand = state.current.hand_values
        actions: list[Action] = []
        for action_type in state.available_actions():
            if action_type == ActionType.SECRET:
                actions.extend(self._generate_secret(hand))
            elif action_type == ActionType.DISCARD:
                actions.extend(self._generate_discard(hand))
            elif action_type == ActionType.GIFT:
                actions.extend(self._generate_gift(hand))
            elif action_type == ActionType.COMPETITION:
                actions.extend(self._generate_competition(hand, state.opponent.hand_values))
        return actions

    def _generate_secret(self, hand: list[int]) -> list[Action]:
        return [Action.secret(value) for value in sorted(set(hand))]

    def _generate_discard(self, hand: list[int]) -> list[Action]:
        return [Action.discard(a, b) for a, b in distinct_pairs(hand)]

    def _generate_gift(self, hand: list[int]) -> list[Action]:
        actions = []
        for kept in distinct_pairs(hand):
            rest = list(hand)
            rest.remove(kept[0])
            rest.remove(kept[1])
            for given in sorted(set(rest)):
                actions.append(Action.gift(kept, given))
        return actions

    def _generate_competition(self, hand: list[int], opponent_hand: list[int]) -> list[Action]:
        return [
            Action.competition(kept, taken)
            for kept in distinct_pairs(hand)
            for taken in distinct_pairs(opponent_hand)
        ]


def legal_actions(state: GameState) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator()
    return generator.generate(state)


def _normalized(action: Action) -> tuple:
    # Order within the named groups does not matter to the engine
    return (action.action_type, tuple(sorted(action.for_player)), tuple(sorted(action.for_other)))


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    target = _normalized(action)
    return any(_normalized(a) == target for a in legal_actions(state))
