"""
Reducer - Applies actions to game state.

The reducer is the single point of card movement during a round.
GameState.apply_action() calls commit_action(), which validates the
whole action before touching any container: an illegal action leaves
the state exactly as it was.

Reducer.apply() is the functional form used for look-ahead:
(state, action) -> ActionResult with a new state, never raising for
illegal actions and never touching the input state.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

from .action import Action, ActionResult
from .cards import Card
from .errors import (
    ActionError,
    ActionUnavailableError,
    CardNotInHandError,
    GameOverError,
    NotPlayingError,
)
from .types import ActionType, GamePhase, PlayerId

if TYPE_CHECKING:
    from .state import GameState


def _locate(hand: list[Card], values: Sequence[int], owner: str) -> list[int]:
    """
    Find a distinct hand position for each named value.

    Naming the same value twice needs two matching cards.
    """
    used: set[int] = set()
    positions = []
    for value in values:
        for idx, card in enumerate(hand):
            if idx not in used and card.value == value:
                used.add(idx)
                positions.append(idx)
                break
        else:
            raise CardNotInHandError(value, owner)
    return positions


def _remove(hand: list[Card], positions: list[int]) -> list[Card]:
    """Remove the cards at positions, returned in the order positions were given."""
    cards = [hand[idx] for idx in positions]
    for idx in sorted(positions, reverse=True):
        del hand[idx]
    return cards


def _score(state: GameState, pid: PlayerId, cards: Sequence[Card]) -> None:
    for card in cards:
        state.places[card.value].add_score(pid)


def validate_action(state: GameState, action: Action) -> tuple[list[int], list[int]]:
    """
    Check that the current player can take the action.

    Returns the hand positions of the named cards as
    (positions in actor's hand, positions in opponent's hand).
    Raises an ActionError subclass otherwise.
    """
    if state.phase == GamePhase.GAME_OVER:
        raise GameOverError("Game is over - no actions allowed")
    if state.phase != GamePhase.PLAYING:
        raise NotPlayingError(f"No round in progress (phase: {state.phase.value})")

    actor = state.current
    opponent = state.opponent
    if actor.has_used(action.action_type):
        raise ActionUnavailableError(
            f"{actor.name} already used {action.action_type.value} this round"
        )

    if action.action_type == ActionType.GIFT:
        # The gifted card comes from the actor's hand too
        return _locate(actor.hand, action.for_player + action.for_other, actor.name), []

    own = _locate(actor.hand, action.for_player, actor.name)
    theirs: list[int] = []
    if action.action_type == ActionType.COMPETITION:
        theirs = _locate(opponent.hand, action.for_other, opponent.name)
    return own, theirs


def commit_action(state: GameState, action: Action) -> None:
    """Move the named cards into the actor's commitment slot and score them."""
    own_positions, their_positions = validate_action(state, action)

    actor_id = state.current_player
    other_id = actor_id.other()
    actor = state.current
    own = _remove(actor.hand, own_positions)

    if action.action_type == ActionType.SECRET:
        actor.secret = own[0]

    elif action.action_type == ActionType.DISCARD:
        actor.discard = (own[0], own[1])

    elif action.action_type == ActionType.GIFT:
        kept = (own[0], own[1])
        given = own[2]
        _score(state, actor_id, kept)
        _score(state, other_id, [given])
        actor.gift = (given, kept)

    elif action.action_type == ActionType.COMPETITION:
        theirs = _remove(state.opponent.hand, their_positions)
        kept = (own[0], own[1])
        taken = (theirs[0], theirs[1])
        _score(state, actor_id, kept)
        _score(state, other_id, taken)
        actor.competition = (taken, kept)


class Reducer:
    """
    Applies actions without mutating the input state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to a clone of the game state.

        Returns ActionResult with new state or error.
        """
        error = self.validate(state, action)
        if error is not None:
            return error

        new_state = state.clone()
        actor_name = new_state.current.name
        try:
            round_result = new_state.apply_action(action)
        except ActionError as e:
            return ActionResult.failure(str(e), error_code=e.code)

        changes = [f"{actor_name}: {action.describe()}"]
        if round_result is not None:
            changes.append(round_result.summary())
            if new_state.phase == GamePhase.PLAYING:
                changes.append(f"Round {new_state.round_number} dealt")

        return ActionResult.success_with_state(
            new_state,
            changes=changes,
            round_result=round_result,
        )

    def validate(self, state: GameState, action: Action) -> ActionResult | None:
        """Return a failure result if the action is illegal, None if it is legal."""
        try:
            validate_action(state, action)
        except ActionError as e:
            return ActionResult.failure(str(e), error_code=e.code)
        return None


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
