"""
Game Loop - Drives a game between two strategies.

The loop:
1. Deal the round if the state is undealt or waiting for reset
2. Ask the current player's strategy for an action
3. For Competition, ask the opponent's strategy for its pair
4. Apply the action
5. Record what happened
6. Repeat until someone wins (or the round limit is hit)

The engine never runs this loop itself; it is a thin driver over
GameState.apply_action().
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions
from ..engine_core.errors import ActionError, TugError
from ..engine_core.state import GameState
from ..engine_core.types import ActionType, GamePhase, PlayerId

if TYPE_CHECKING:
    from ..bots.policy import Strategy
    from ..engine_core.scoring import RoundResult


DEFAULT_MAX_ROUNDS = 50


class StrategyError(TugError):
    """A strategy produced an action the engine rejected."""


class LoopState(Enum):
    """State of the game loop."""
    WAITING_ACTION = "waiting_action"
    GAME_OVER = "game_over"
    ROUND_LIMIT = "round_limit"


@dataclass
class TurnResult:
    """
    Result of processing one turn.
    """
    player: PlayerId
    action: Action
    loop_state: LoopState
    explanation: str = ""
    state_changes: list[str] = field(default_factory=list)
    round_result: RoundResult | None = None
    winner: PlayerId | None = None


@dataclass
class GameRecord:
    """Summary of a finished (or abandoned) game."""
    winner: PlayerId | None
    rounds: int
    turns: int
    round_results: list[RoundResult] = field(default_factory=list)
    events: list[str] = field(default_factory=list)


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(GameState.new(seed=1), (GreedyStrategy(), RandomStrategy()))
        record = loop.run()
        print(record.winner)
    """

    def __init__(
        self,
        state: GameState,
        strategies: tuple[Strategy, Strategy] | list[Strategy],
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ):
        if len(strategies) != 2:
            raise ValueError("A game needs exactly two strategies")
        self.state = state
        self.strategies = tuple(strategies)
        self.max_rounds = max_rounds
        self.loop_state = LoopState.WAITING_ACTION
        self.turns = 0
        self.round_results: list[RoundResult] = []
        self.events: list[str] = []

    def strategy_for(self, pid: PlayerId) -> Strategy:
        return self.strategies[pid.index]

    def step(self) -> TurnResult:
        """
        Play one turn.

        Raises StrategyError if a strategy picks an illegal action.
        """
        if self.loop_state != LoopState.WAITING_ACTION:
            raise TugError(f"Game loop has stopped ({self.loop_state.value})")

        state = self.state
        if state.phase in (GamePhase.SETUP, GamePhase.ROUND_OVER):
            state.reset()
            self.events.append(f"Round {state.round_number} dealt")

        pid = state.current_player
        strategy = self.strategy_for(pid)
        decision = strategy.select_action(state, legal_actions(state))
        action = decision.action

        if action.action_type == ActionType.COMPETITION:
            offered = (action.for_player[0], action.for_player[1])
            picks = self.strategy_for(pid.other()).assign_competition(state, pid.other(), offered)
            action = Action.competition(offered, picks)

        try:
            round_result = state.apply_action(action)
        except ActionError as e:
            raise StrategyError(f"{strategy.get_name()} ({pid.label}) chose an illegal action: {e}") from e

        self.turns += 1
        changes = [f"{pid.label}: {action.describe()}"]
        winner = None
        if round_result is not None:
            self.round_results.append(round_result)
            changes.append(round_result.summary())
            winner = round_result.winner
            if winner is not None:
                self.loop_state = LoopState.GAME_OVER
            elif round_result.round_number >= self.max_rounds:
                self.loop_state = LoopState.ROUND_LIMIT
            elif state.phase == GamePhase.PLAYING:
                changes.append(f"Round {state.round_number} dealt")
        self.events.extend(changes)

        return TurnResult(
            player=pid,
            action=action,
            loop_state=self.loop_state,
            explanation=decision.explanation,
            state_changes=changes,
            round_result=round_result,
            winner=winner,
        )

    def run(self) -> GameRecord:
        """Play turns until the game ends or the round limit is reached."""
        while self.loop_state == LoopState.WAITING_ACTION:
            self.step()
        return self.record()

    def record(self) -> GameRecord:
        return GameRecord(
            winner=self.state.winner,
            rounds=len(self.round_results),
            turns=self.turns,
            round_results=list(self.round_results),
            events=list(self.events),
        )


def play_game(
    first: Strategy,
    second: Strategy,
    seed: int | None = None,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> GameRecord:
    """
    Convenience function to play a whole game.

    Builds a fresh state from the seed and runs the loop.
    """
    loop = GameLoop(GameState.new(seed=seed), (first, second), max_rounds=max_rounds)
    return loop.run()
