"""
Strategy - Interface for deciding moves.

A Strategy has two jobs:
- Choose the next action from the legal actions
- Assign its own two cards when the opponent plays Competition

Strategies receive the full GameState; implementations that play fair
read it through state.view_for(player) only.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable

from ..engine_core.action_generator import distinct_pairs

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState
    from ..engine_core.types import PlayerId


@dataclass
class BotDecision:
    """
    A decision made by a strategy.

    Contains:
    - The action to take
    - Explanation (for console output/debugging)
    - Evaluation details
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class Strategy(ABC):
    """
    Abstract base class for strategies.

    Implementations range from scripted test adapters to look-ahead
    bots and human input.
    """

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        For Competition only for_player matters: the opponent's pair is
        assigned by the opponent's assign_competition().
        """

    @abstractmethod
    def assign_competition(
        self,
        state: GameState,
        player: PlayerId,
        offered: tuple[int, int],
    ) -> tuple[int, int]:
        """
        Pick two card values from this player's own hand for the
        opponent's Competition. ``offered`` is the pair the opponent
        committed for themselves.
        """

    def get_name(self) -> str:
        """Get the strategy's name/identifier."""
        return self.__class__.__name__


class RandomStrategy(Strategy):
    """
    Random strategy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        import random
        self.rng = random.Random(seed)

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )

    def assign_competition(
        self,
        state: GameState,
        player: PlayerId,
        offered: tuple[int, int],
    ) -> tuple[int, int]:
        hand = state.hand_values(player)
        if len(hand) < 2:
            raise ValueError("Not enough cards to assign")
        a, b = self.rng.sample(hand, 2)
        return (a, b)


class FirstLegalStrategy(Strategy):
    """
    First-legal strategy - always selects the first legal action.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )

    def assign_competition(
        self,
        state: GameState,
        player: PlayerId,
        offered: tuple[int, int],
    ) -> tuple[int, int]:
        pairs = distinct_pairs(state.hand_values(player))
        if not pairs:
            raise ValueError("Not enough cards to assign")
        return pairs[0]


class ScriptedStrategy(Strategy):
    """
    Plays a fixed script of actions, in order.

    Scripted actions are returned as-is, legal or not, so tests can drive
    the engine into error paths. When the script runs out it falls back
    to the first legal action.
    """

    def __init__(
        self,
        actions: Iterable[Action] = (),
        competition_picks: Iterable[tuple[int, int]] = (),
    ):
        self.actions = list(actions)
        self.competition_picks = list(competition_picks)
        self._fallback = FirstLegalStrategy()

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if self.actions:
            return BotDecision(action=self.actions.pop(0), explanation="Scripted")
        return self._fallback.select_action(state, legal_actions)

    def assign_competition(
        self,
        state: GameState,
        player: PlayerId,
        offered: tuple[int, int],
    ) -> tuple[int, int]:
        if self.competition_picks:
            return self.competition_picks.pop(0)
        return self._fallback.assign_competition(state, player, offered)
