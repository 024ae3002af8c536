"""
Tests for strategies and the heuristic evaluator.
"""

import pytest

from ..bots.console import ConsoleStrategy, parse_command
from ..bots.evaluator import HeuristicEvaluator
from ..bots.greedy_bot import GreedyStrategy
from ..bots.policy import FirstLegalStrategy, RandomStrategy, ScriptedStrategy
from ..engine_core.action import Action
from ..engine_core.action_generator import is_legal, legal_actions
from ..engine_core.state import GameState
from ..engine_core.types import ActionType, PlayerId

FIRST, SECOND = PlayerId.FIRST, PlayerId.SECOND


def feed(lines):
    """An input function that replays the given lines."""
    it = iter(lines)
    return lambda prompt="": next(it)


class TestSimpleStrategies:

    def test_random_picks_legal_action(self, dealt_state):
        strategy = RandomStrategy(seed=1)
        legal = legal_actions(dealt_state)
        for _ in range(10):
            decision = strategy.select_action(dealt_state, legal)
            assert decision.action in legal

    def test_random_assigns_from_own_hand(self, dealt_state):
        picks = RandomStrategy(seed=1).assign_competition(dealt_state, SECOND, (0, 0))
        hand = dealt_state.hand_values(SECOND)
        for value in picks:
            hand.remove(value)

    def test_first_legal_is_deterministic(self, dealt_state):
        legal = legal_actions(dealt_state)
        decision = FirstLegalStrategy().select_action(dealt_state, legal)
        assert decision.action == legal[0]

    def test_no_legal_actions_raises(self, dealt_state):
        with pytest.raises(ValueError):
            FirstLegalStrategy().select_action(dealt_state, [])

    def test_scripted_plays_script_then_falls_back(self, dealt_state):
        scripted = Action.secret(6)
        strategy = ScriptedStrategy([scripted], competition_picks=[(1, 2)])
        legal = legal_actions(dealt_state)

        assert strategy.select_action(dealt_state, legal).action == scripted
        assert strategy.select_action(dealt_state, legal).action == legal[0]
        assert strategy.assign_competition(dealt_state, SECOND, (0, 0)) == (1, 2)


class TestHeuristicEvaluator:

    def test_leading_at_a_place_is_better(self, dealt_state):
        evaluator = HeuristicEvaluator()
        baseline = evaluator.evaluate(dealt_state, FIRST).total_score

        dealt_state.places[6].add_score(FIRST)
        assert evaluator.evaluate(dealt_state, FIRST).total_score > baseline
        assert evaluator.evaluate(dealt_state, SECOND).total_score < baseline

    def test_winning_state_gets_win_bonus(self, dealt_state):
        evaluator = HeuristicEvaluator()
        dealt_state.winner = FIRST
        evaluation = evaluator.evaluate(dealt_state, FIRST)
        assert evaluation.feature_breakdown["winner"] > 0

    def test_illegal_action_scores_minus_infinity(self, dealt_state, rig):
        state = rig(dealt_state, [0, 1, 2, 3, 4, 5, 6], [0, 1, 2, 5, 6, 6])
        score = HeuristicEvaluator().evaluate_action(state, Action.discard(3, 3), FIRST)
        assert score == float("-inf")


class TestGreedyStrategy:

    def test_greedy_picks_best_legal_action(self, dealt_state):
        legal = legal_actions(dealt_state)
        decision = GreedyStrategy().select_action(dealt_state, legal)

        assert decision.action in legal
        assert decision.best_score == max(decision.evaluation_details.values())

    def test_competition_candidates_collapse_on_own_pair(self, dealt_state):
        legal = legal_actions(dealt_state)
        decision = GreedyStrategy().select_action(dealt_state, legal)
        own_pairs = {a.for_player for a in legal if a.action_type == ActionType.COMPETITION}
        others = [a for a in legal if a.action_type != ActionType.COMPETITION]
        assert decision.evaluated_actions == len(others) + len(own_pairs)

    def test_greedy_gifts_away_a_low_place(self, dealt_state, rig):
        state = rig(dealt_state, [0, 1, 2, 3, 4, 6, 6], [0, 1, 2, 5, 5, 6])
        # Only gift and secret are left for First
        state.player(FIRST).discard = (state.deck.pop(), state.deck.pop())
        state.player(FIRST).competition = (
            (state.deck.pop(), state.deck.pop()),
            (state.deck.pop(), state.deck.pop()),
        )

        decision = GreedyStrategy().select_action(state, legal_actions(state))

        assert decision.action.action_type == ActionType.GIFT
        assert 6 in decision.action.for_player
        assert state.places[decision.action.for_other[0]].face_value == 2

    def test_competition_ignores_opponent_hand(self, rig):
        states = []
        for opponent_hand in ([0, 1, 2, 5, 6, 6], [0, 1, 2, 3, 3, 4]):
            state = GameState.new(seed=7)
            state.reset()
            states.append(rig(state, [0, 1, 2, 3, 4, 5, 6], opponent_hand))

        details = []
        for state in states:
            decision = GreedyStrategy().select_action(state, legal_actions(state))
            details.append({k: v for k, v in decision.evaluation_details.items() if k.startswith("competition")})

        assert details[0]
        assert details[0] == details[1]

    def test_greedy_assignment_is_from_own_hand(self, dealt_state):
        opponent = dealt_state.current_player.other()
        picks = GreedyStrategy().assign_competition(dealt_state, opponent, (0, 0))
        hand = dealt_state.hand_values(opponent)
        for value in picks:
            hand.remove(value)


class TestConsoleStrategy:

    def test_parse_command(self):
        assert parse_command("secret 3") == (ActionType.SECRET, (3,), ())
        assert parse_command("d 1 2") == (ActionType.DISCARD, (1, 2), ())
        assert parse_command("gift 1 2 6") == (ActionType.GIFT, (1, 2), (6,))
        assert parse_command("C 5 5") == (ActionType.COMPETITION, (5, 5), ())

    @pytest.mark.parametrize("line", ["", "jump 1", "secret", "discard 1 x", "gift 1 2"])
    def test_parse_command_rejects(self, line):
        with pytest.raises(ValueError):
            parse_command(line)

    def test_retries_until_a_legal_move(self, dealt_state, rig):
        state = rig(dealt_state, [0, 1, 2, 3, 4, 5, 6], [0, 1, 2, 5, 6, 6])
        output = []
        strategy = ConsoleStrategy(
            input_fn=feed(["hello", "discard 3 3", "discard 6 3"]),
            output_fn=output.append,
        )

        decision = strategy.select_action(state, legal_actions(state))

        assert decision.action.action_type == ActionType.DISCARD
        assert sorted(decision.action.for_player) == [3, 6]
        assert is_legal(state, decision.action)
        assert any("Invalid move" in line for line in output)
        assert any("not available" in line for line in output)

    def test_competition_move_leaves_pair_to_opponent(self, dealt_state, rig):
        state = rig(dealt_state, [0, 1, 2, 3, 4, 5, 6], [0, 1, 2, 5, 6, 6])
        strategy = ConsoleStrategy(input_fn=feed(["c 6 5"]), output_fn=lambda line: None)
        decision = strategy.select_action(state, legal_actions(state))
        assert decision.action.action_type == ActionType.COMPETITION
        assert sorted(decision.action.for_player) == [5, 6]

    def test_assign_competition_checks_hand(self, dealt_state, rig):
        state = rig(dealt_state, [0, 1, 2, 3, 4, 5, 6], [0, 1, 2, 5, 6, 6])
        strategy = ConsoleStrategy(input_fn=feed(["3 4", "6", "6 6"]), output_fn=lambda line: None)
        assert strategy.assign_competition(state, SECOND, (5, 6)) == (6, 6)

    def test_gives_up_after_too_many_attempts(self, dealt_state):
        strategy = ConsoleStrategy(input_fn=lambda prompt="": "nonsense", output_fn=lambda line: None, max_attempts=3)
        with pytest.raises(ValueError, match="Too many"):
            strategy.select_action(dealt_state, legal_actions(dealt_state))
