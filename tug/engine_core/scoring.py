"""
Win evaluation.

Run once per round, after all eight commitment slots are full:
1. Control pass - the player with more cards at a place takes control;
   a tie keeps whatever control the place already had.
2. Tally - points (face values) and number of places controlled.
3. Win check - 11 points wins, else 4 places wins. First is checked
   before Second within each threshold.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from .constants import WINNING_PLACES, WINNING_POINTS
from .types import PlayerId

if TYPE_CHECKING:
    from .state import Place


@dataclass(frozen=True)
class RoundResult:
    """Evaluation of a finished round."""
    round_number: int
    total_points: tuple[int, int]
    places_controlled: tuple[int, int]
    control: tuple[PlayerId | None, ...]
    winner: PlayerId | None = None

    def summary(self) -> str:
        first, second = PlayerId.FIRST.index, PlayerId.SECOND.index
        text = (
            f"Round {self.round_number}: "
            f"First {self.total_points[first]} pts / {self.places_controlled[first]} places, "
            f"Second {self.total_points[second]} pts / {self.places_controlled[second]} places"
        )
        if self.winner is not None:
            text += f" - {self.winner.label} wins"
        return text


def update_control(places: Sequence[Place]) -> None:
    """Give each place to the player with the higher score there."""
    first, second = PlayerId.FIRST.index, PlayerId.SECOND.index
    for place in places:
        if place.scores[first] > place.scores[second]:
            place.control = PlayerId.FIRST
        elif place.scores[second] > place.scores[first]:
            place.control = PlayerId.SECOND


def tally(places: Sequence[Place]) -> tuple[tuple[int, int], tuple[int, int]]:
    """Return (total_points, places_controlled), each indexed by player."""
    points = [0, 0]
    controlled = [0, 0]
    for place in places:
        if place.control is not None:
            points[place.control.index] += place.face_value
            controlled[place.control.index] += 1
    return (points[0], points[1]), (controlled[0], controlled[1])


def check_winner(
    total_points: Sequence[int],
    places_controlled: Sequence[int],
) -> PlayerId | None:
    for pid in PlayerId:
        if total_points[pid.index] >= WINNING_POINTS:
            return pid
    for pid in PlayerId:
        if places_controlled[pid.index] >= WINNING_PLACES:
            return pid
    return None


def evaluate(places: Sequence[Place], round_number: int = 0) -> RoundResult:
    """Update control on the places and decide whether anyone won."""
    update_control(places)
    total_points, places_controlled = tally(places)
    return RoundResult(
        round_number=round_number,
        total_points=total_points,
        places_controlled=places_controlled,
        control=tuple(place.control for place in places),
        winner=check_winner(total_points, places_controlled),
    )
