"""
Cards and the deck.

Cards are physical resources: every card is created once, when the deck
is built, and from then on it only moves between containers (deck,
hand, commitment slot, discard). A Card compares by identity and
refuses to be copied, so a card can never be duplicated behind the
engine's back; conservation is checked by counting card identities.
"""

from __future__ import annotations
import random
from collections import Counter
from typing import Iterable

from .constants import NUM_PLACES, PLACE_VALUES
from .errors import EmptyDeckError


class Card:
    """A single card, tagged with the index of the place it belongs to."""

    __slots__ = ("_value",)

    def __init__(self, value: int):
        if not 0 <= value < NUM_PLACES:
            raise ValueError(f"Card value must be in 0..{NUM_PLACES - 1}, got {value}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def __copy__(self):
        raise TypeError("Cards are physical resources and cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("Cards are physical resources and cannot be copied")

    def __reduce_ex__(self, protocol):
        raise TypeError("Cards are physical resources and cannot be pickled")

    def __repr__(self) -> str:
        return f"Card({self._value})"


def build_deck(face_values: Iterable[int] = PLACE_VALUES) -> list[Card]:
    """Build the full deck: one card per face value point of every place, in place order."""
    return [
        Card(place_idx)
        for place_idx, face_value in enumerate(face_values)
        for _ in range(face_value)
    ]


def shuffle(deck: list[Card], rng: random.Random) -> None:
    """Shuffle the deck in place (Fisher-Yates via the state's own rng)."""
    rng.shuffle(deck)


def draw(deck: list[Card]) -> Card:
    """Remove and return the top card."""
    if not deck:
        raise EmptyDeckError("Cannot draw from an empty deck")
    return deck.pop()


def count_values(cards: Iterable[Card]) -> Counter:
    """Count cards by value."""
    return Counter(card.value for card in cards)


def full_deck_counts() -> Counter:
    """Value counts of a complete deck."""
    return Counter({idx: face_value for idx, face_value in enumerate(PLACE_VALUES)})
