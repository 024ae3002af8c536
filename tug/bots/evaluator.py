"""
Heuristic Evaluator - Scores game states for bot decision-making.

The evaluator projects who would control each place if the round ended
now and scores:
- Projected points and places (relative to the opponent)
- Card margins at each place, weighted by the place's value
- Closeness to the win thresholds
- Actual wins and losses

Weights can be adjusted to create different play styles.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.constants import WINNING_PLACES, WINNING_POINTS

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState
    from ..engine_core.types import PlayerId


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    point_value: float = 3.0  # Per projected point held
    place_value: float = 4.0  # Per projected place held
    margin_value: float = 0.5  # Per card of margin, times face value
    threshold_bonus: float = 20.0  # Projected to reach 11 points or 4 places
    win_bonus: float = 1000.0


@dataclass
class StateEvaluation:
    """
    Result of evaluating a game state.
    """
    total_score: float
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class HeuristicEvaluator:
    """
    Evaluates game states using weighted heuristics.

    Used by bots for 1-ply lookahead:
    1. Generate legal actions
    2. Apply each action to a clone of the state
    3. Evaluate new states
    4. Select action leading to best state
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(self, state: GameState, for_player: PlayerId) -> StateEvaluation:
        """
        Evaluate a game state from a player's perspective.

        Returns positive score if state is good for player,
        negative if bad.
        """
        me, them = for_player.index, for_player.other().index
        points = [0, 0]
        places = [0, 0]
        margin_total = 0.0

        for place in state.places:
            margin = place.scores[me] - place.scores[them]
            if margin > 0:
                holder = me
            elif margin < 0:
                holder = them
            else:
                holder = place.control.index if place.control is not None else None
            if holder is not None:
                points[holder] += place.face_value
                places[holder] += 1
            margin_total += margin * place.face_value

        features = {
            "points": (points[me] - points[them]) * self.weights.point_value,
            "places": (places[me] - places[them]) * self.weights.place_value,
            "margin": margin_total * self.weights.margin_value,
            "threshold": self._threshold_score(points, places, me, them),
        }

        if state.winner is not None:
            features["winner"] = self.weights.win_bonus if state.winner == for_player else -self.weights.win_bonus

        return StateEvaluation(
            total_score=sum(features.values()),
            feature_breakdown=features,
        )

    def evaluate_action(self, state: GameState, action: Action, for_player: PlayerId) -> float:
        """
        Evaluate an action by applying it and evaluating resulting state.

        This is the core of 1-ply lookahead.
        """
        from ..engine_core.reducer import apply_action

        result = apply_action(state, action)
        if not result.success or not result.new_state:
            return float("-inf")  # Invalid action

        return self.evaluate(result.new_state, for_player).total_score

    def _threshold_score(self, points: list[int], places: list[int], me: int, them: int) -> float:
        score = 0.0
        if points[me] >= WINNING_POINTS or places[me] >= WINNING_PLACES:
            score += self.weights.threshold_bonus
        if points[them] >= WINNING_POINTS or places[them] >= WINNING_PLACES:
            score -= self.weights.threshold_bonus
        return score
