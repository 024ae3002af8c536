"""
Pytest fixtures for Tug tests.
"""

from __future__ import annotations
from typing import Iterable

import pytest

from ..engine_core.action_generator import legal_actions
from ..engine_core.cards import Card, full_deck_counts
from ..engine_core.scoring import RoundResult
from ..engine_core.state import GameState
from ..engine_core.types import PlayerId


@pytest.fixture
def new_state() -> GameState:
    """A seeded game that has not been dealt yet."""
    return GameState.new(seed=7)


@pytest.fixture
def dealt_state() -> GameState:
    """A seeded game in the first turn of round 1."""
    state = GameState.new(seed=7)
    state.reset()
    return state


@pytest.fixture
def manual_state() -> GameState:
    """A dealt game that stops at ROUND_OVER instead of redealing."""
    state = GameState.new(seed=11, auto_reset=False)
    state.reset()
    return state


def rig_hands(
    state: GameState,
    first: Iterable[int],
    second: Iterable[int],
    current: PlayerId = PlayerId.FIRST,
) -> GameState:
    """
    Give each player a hand with exactly the given card values.

    Cards are taken from the deck, the hands and the discard; whatever
    is left over goes back to the deck (one card becomes the discard
    again), so the game still owns the full deck. Commitment slots are
    left alone.
    """
    pool: list[Card] = list(state.deck)
    for p in state.players:
        pool.extend(p.hand)
        p.hand = []
    if state.discarded is not None:
        pool.append(state.discarded)
        state.discarded = None

    for pid, values in ((PlayerId.FIRST, first), (PlayerId.SECOND, second)):
        for value in values:
            card = next((c for c in pool if c.value == value), None)
            if card is None:
                raise ValueError(f"No spare card with value {value} to rig")
            pool.remove(card)
            state.player(pid).hand.append(card)

    state.discarded = pool.pop()
    state.deck = pool
    state.current_player = current
    return state


@pytest.fixture
def rig():
    """The rig_hands helper, as a fixture."""
    return rig_hands


def assert_conserved(state: GameState) -> None:
    """Every card of the full deck is in exactly one container."""
    cards = list(state.iter_cards())
    assert len({id(c) for c in cards}) == len(cards)
    assert state.card_counts() == full_deck_counts()


def play_round(state: GameState) -> RoundResult | None:
    """Play the first legal action until the round closes (eight turns)."""
    result = None
    for _ in range(8):
        result = state.apply_action(legal_actions(state)[0])
    return result
