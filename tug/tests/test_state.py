"""
Tests for GameState: setup, dealing, the round lifecycle and player views.
"""

import pytest

from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions
from ..engine_core.constants import DECK_SIZE, HAND_SIZE, MAX_HAND_SIZE
from ..engine_core.errors import RoundInProgressError
from ..engine_core.state import GameState
from ..engine_core.types import ActionType, GamePhase, PlayerId
from .conftest import assert_conserved, play_round


def finish_round_without_winner(state: GameState) -> None:
    """Close the round and park the state at ROUND_OVER whatever the outcome."""
    play_round(state)
    state.phase = GamePhase.ROUND_OVER
    state.winner = None


class TestNewGame:
    """Tests for GameState.new()."""

    def test_new_game_is_undealt(self, new_state):
        assert new_state.phase == GamePhase.SETUP
        assert new_state.round_number == 0
        assert all(p.hand == [] for p in new_state.players)
        assert new_state.available_actions() == []

    def test_new_game_sets_one_card_aside(self, new_state):
        assert new_state.discarded is not None
        assert len(new_state.deck) == DECK_SIZE - 1
        assert_conserved(new_state)

    def test_places_start_uncontrolled(self, new_state):
        assert [p.face_value for p in new_state.places] == [2, 2, 2, 3, 3, 4, 5]
        assert all(p.control is None and p.scores == [0, 0] for p in new_state.places)

    def test_same_seed_same_game(self):
        a, b = GameState.new(seed=99), GameState.new(seed=99)
        a.reset()
        b.reset()
        assert a.current_player == b.current_player
        assert a.hand_values(PlayerId.FIRST) == b.hand_values(PlayerId.FIRST)
        assert a.hand_values(PlayerId.SECOND) == b.hand_values(PlayerId.SECOND)


class TestReset:
    """Tests for dealing rounds."""

    def test_first_reset_deals_hands(self, dealt_state):
        state = dealt_state
        assert state.phase == GamePhase.PLAYING
        assert state.round_number == 1
        # The player to act has already drawn their turn card
        assert len(state.current.hand) == HAND_SIZE + 1
        assert len(state.opponent.hand) == HAND_SIZE
        assert len(state.deck) == DECK_SIZE - 1 - 2 * HAND_SIZE - 1
        assert_conserved(state)

    def test_reset_during_round_raises(self, dealt_state):
        with pytest.raises(RoundInProgressError):
            dealt_state.reset()

    def test_reset_with_cards_left_in_deck_raises(self, dealt_state):
        dealt_state.phase = GamePhase.ROUND_OVER
        with pytest.raises(RoundInProgressError):
            dealt_state.reset()

    def test_reset_after_game_over_raises(self, manual_state):
        finish_round_without_winner(manual_state)
        manual_state.phase = GamePhase.GAME_OVER
        with pytest.raises(RoundInProgressError):
            manual_state.reset()

    def test_reset_clears_scores_but_keeps_control(self, manual_state):
        state = manual_state
        finish_round_without_winner(state)
        control_before = [p.control for p in state.places]
        assert any(c is not None for c in control_before)

        state.reset()

        assert state.phase == GamePhase.PLAYING
        assert state.round_number == 2
        assert [p.control for p in state.places] == control_before
        assert all(p.scores == [0, 0] for p in state.places)
        for player in state.players:
            assert not any(player.has_used(a) for a in ActionType)
        assert_conserved(state)


class TestRoundLifecycle:
    """Tests for playing a round to its end."""

    def test_round_uses_up_deck_and_hands(self, manual_state):
        result = play_round(manual_state)

        assert result is not None
        assert result.round_number == 1
        assert manual_state.deck == []
        assert all(p.hand == [] for p in manual_state.players)
        assert all(p.round_complete for p in manual_state.players)
        assert_conserved(manual_state)

    def test_round_end_phase(self, manual_state):
        result = play_round(manual_state)
        if result.winner is None:
            assert manual_state.phase == GamePhase.ROUND_OVER
        else:
            assert manual_state.phase == GamePhase.GAME_OVER
            assert manual_state.winner == result.winner
        assert manual_state.last_round is result

    def test_auto_reset_deals_next_round(self):
        state = GameState.new(seed=5)
        state.reset()
        result = play_round(state)
        if result.winner is None:
            assert state.phase == GamePhase.PLAYING
            assert state.round_number == 2
            assert len(state.current.hand) == HAND_SIZE + 1
        assert_conserved(state)

    def test_turns_keep_alternating_across_rounds(self):
        state = GameState.new(seed=5)
        state.reset()
        starter = state.current_player
        result = play_round(state)
        if result.winner is None:
            # Eight turns per round, so the same player opens the next round
            assert state.current_player == starter

    def test_hand_never_exceeds_limit(self, dealt_state):
        state = dealt_state
        for _ in range(8):
            assert all(len(p.hand) <= MAX_HAND_SIZE for p in state.players)
            state.apply_action(legal_actions(state)[0])

    def test_each_action_removes_one_availability(self, dealt_state):
        state = dealt_state
        actor = state.current_player
        state.apply_action(Action.secret(state.current.hand_values[0]))

        assert ActionType.SECRET not in state.available_actions(actor)
        assert state.available_actions() == list(ActionType)
        assert state.current_player == actor.other()


class TestPlayerView:
    """Tests for hidden information."""

    def test_view_hides_opponent_hand(self, dealt_state):
        me = dealt_state.current_player
        view = dealt_state.view_for(me)

        assert view.hand == tuple(dealt_state.hand_values(me))
        assert view.opponent_hand_size == len(dealt_state.opponent.hand)
        assert view.is_my_turn
        assert not dealt_state.view_for(me.other()).is_my_turn

    def test_view_hides_opponent_secret(self, dealt_state):
        state = dealt_state
        actor = state.current_player
        value = state.current.hand_values[0]
        state.apply_action(Action.secret(value))

        mine = state.view_for(actor)
        theirs = state.view_for(actor.other())
        assert mine.secret == value
        assert ActionType.SECRET in theirs.opponent_used
        assert theirs.secret is None

    def test_view_renders(self, dealt_state):
        text = dealt_state.view_for(PlayerId.FIRST).render()
        assert "Round 1" in text
        assert "Your hand" in text
