"""
Greedy Bot - One-ply look-ahead strategy.

Decision process:
1. Collapse the legal actions to the ones that differ for this player
   (the opponent assigns its own Competition pair, so only our pair
   matters)
2. Apply each candidate to a clone of the state. A Competition is
   projected with our pair only, since the opponent's pair is its
   own choice and its hand is hidden
3. Score the result with the HeuristicEvaluator, which reads the
   public places only
4. Pick the best; ties go to the earliest candidate
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..engine_core.action import Action
from ..engine_core.action_generator import distinct_pairs
from ..engine_core.types import ActionType
from .evaluator import EvaluationWeights, HeuristicEvaluator
from .policy import BotDecision, Strategy

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.types import PlayerId


class GreedyStrategy(Strategy):
    """Picks the action whose immediate result scores best."""

    def __init__(self, weights: EvaluationWeights | None = None):
        self.evaluator = HeuristicEvaluator(weights)

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        me = state.current_player
        candidates = self._candidates(legal_actions)

        best_action = candidates[0]
        best_score = float("-inf")
        scores: dict[str, float] = {}
        for action in candidates:
            if action.action_type == ActionType.COMPETITION:
                score = self._score_own_pair(state, action.for_player, me)
                scores[f"competition keeps {list(action.for_player)}"] = score
            else:
                score = self.evaluator.evaluate_action(state, action, me)
                scores[action.describe()] = score
            if score > best_score:
                best_action, best_score = action, score

        return BotDecision(
            action=best_action,
            explanation=f"Best of {len(candidates)} candidates (score {best_score:.1f})",
            evaluated_actions=len(candidates),
            best_score=best_score,
            evaluation_details=scores,
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

        best_pair = pairs[0]
        best_score = float("-inf")
        for pair in pairs:
            action = Action.competition(offered, pair)
            score = self.evaluator.evaluate_action(state, action, player)
            if score > best_score:
                best_pair, best_score = pair, score
        return best_pair

    def _score_own_pair(self, state: GameState, pair: tuple[int, ...], me: PlayerId) -> float:
        projected = state.clone()
        for value in pair:
            projected.places[value].add_score(me)
        return self.evaluator.evaluate(projected, me).total_score

    def _candidates(self, legal_actions: list[Action]) -> list[Action]:
        seen: set[tuple] = set()
        candidates = []
        for action in legal_actions:
            if action.action_type == ActionType.COMPETITION:
                key = (action.action_type, action.for_player)
            else:
                key = (action.action_type, action.for_player, action.for_other)
            if key not in seen:
                seen.add(key)
                candidates.append(action)
        return candidates
