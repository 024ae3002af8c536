"""
Player View - What one player is allowed to see.

The engine itself holds both hands in full; drivers and strategies that
care about hidden information read the game through a PlayerView:
- own hand and all own commitments
- the opponent's hand SIZE only
- the opponent's gift and competition cards (played face up)
- whether the opponent has used secret/discard, but not which cards
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .types import ActionType, GamePhase, PlayerId

if TYPE_CHECKING:
    from .state import GameState, PlayerState


@dataclass(frozen=True)
class PlaceView:
    index: int
    face_value: int
    scores: tuple[int, int]
    control: PlayerId | None


@dataclass(frozen=True)
class PlayerView:
    player: PlayerId
    current_player: PlayerId
    phase: GamePhase
    round_number: int
    hand: tuple[int, ...]
    opponent_hand_size: int
    deck_size: int
    places: tuple[PlaceView, ...]
    available_actions: tuple[ActionType, ...]

    secret: int | None = None
    discard: tuple[int, ...] | None = None
    gift: tuple[int, tuple[int, ...]] | None = None
    competition: tuple[tuple[int, ...], tuple[int, ...]] | None = None

    opponent_used: tuple[ActionType, ...] = ()
    opponent_gift: tuple[int, tuple[int, ...]] | None = None
    opponent_competition: tuple[tuple[int, ...], tuple[int, ...]] | None = None

    winner: PlayerId | None = None

    @property
    def is_my_turn(self) -> bool:
        return self.phase == GamePhase.PLAYING and self.current_player == self.player

    @classmethod
    def of(cls, state: GameState, pid: PlayerId) -> PlayerView:
        me = state.player(pid)
        them = state.player(pid.other())
        own_gift, own_competition = _public_slots(me)
        their_gift, their_competition = _public_slots(them)
        return cls(
            player=pid,
            current_player=state.current_player,
            phase=state.phase,
            round_number=state.round_number,
            hand=tuple(me.hand_values),
            opponent_hand_size=len(them.hand),
            deck_size=len(state.deck),
            places=tuple(
                PlaceView(
                    index=idx,
                    face_value=place.face_value,
                    scores=(place.scores[0], place.scores[1]),
                    control=place.control,
                )
                for idx, place in enumerate(state.places)
            ),
            available_actions=tuple(state.available_actions(pid)),
            secret=me.secret.value if me.secret is not None else None,
            discard=tuple(c.value for c in me.discard) if me.discard is not None else None,
            gift=own_gift,
            competition=own_competition,
            opponent_used=tuple(a for a in ActionType if them.has_used(a)),
            opponent_gift=their_gift,
            opponent_competition=their_competition,
            winner=state.winner,
        )

    def render(self) -> str:
        """Plain-text summary for console play."""
        lines = [f"Round {self.round_number} - you are {self.player.label}"]
        for place in self.places:
            owner = place.control.label if place.control else "-"
            lines.append(
                f"  place {place.index} (worth {place.face_value}): "
                f"you {place.scores[self.player.index]} / them {place.scores[self.player.other().index]}"
                f"  control: {owner}"
            )
        lines.append(f"Your hand: {' '.join(str(v) for v in sorted(self.hand))}")
        lines.append(f"Opponent holds {self.opponent_hand_size} card(s); deck has {self.deck_size}")
        if self.available_actions:
            lines.append("Available: " + ", ".join(a.value for a in self.available_actions))
        return "\n".join(lines)


def _public_slots(player: PlayerState):
    gift = None
    if player.gift is not None:
        given, kept = player.gift
        gift = (given.value, tuple(c.value for c in kept))
    competition = None
    if player.competition is not None:
        theirs, ours = player.competition
        competition = (tuple(c.value for c in theirs), tuple(c.value for c in ours))
    return gift, competition
