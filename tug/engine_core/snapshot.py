"""
Snapshot codec - Compact, versioned binary encoding of a GameState.

Used by GameState.clone() for speculative play (every clone is a full
encode/decode round trip, so clones share nothing with the original).

Layout:
    b"TUG" + version byte + zlib(JSON of GameSnapshot)

The JSON body is produced and validated by the Pydantic models below.
Decoding fails fast with SnapshotError on a bad header, a corrupt
payload, a schema violation, a card multiset that is not the full
deck, or a phase its contents contradict (a winner outside GAME_OVER,
cards dealt in SETUP, an empty hand on the current turn). The encoding
is internal; it is only guaranteed to round-trip within one version of
the package.
"""

from __future__ import annotations
import random
import zlib
from typing import Annotated, Optional

from pydantic import BaseModel, Field, ValidationError

from .cards import Card, count_values, full_deck_counts
from .constants import MAX_HAND_SIZE, NUM_PLACES, PLACE_VALUES
from .errors import SnapshotError
from .state import GameState, Place, PlayerState
from .types import GamePhase, PlayerId

SNAPSHOT_MAGIC = b"TUG"
SNAPSHOT_VERSION = 1

CardValue = Annotated[int, Field(ge=0, le=NUM_PLACES - 1)]
PlayerIndex = Annotated[int, Field(ge=0, le=1)]
# Mersenne Twister state: 624 words plus the position index
RngWord = Annotated[int, Field(ge=0, lt=2**32)]
RNG_STATE_LENGTH = 625
Pair = tuple[CardValue, CardValue]


# =============================================================================
# Schema
# =============================================================================

class PlaceSnapshot(BaseModel):
    face_value: int = Field(ge=1)
    scores: tuple[Annotated[int, Field(ge=0)], Annotated[int, Field(ge=0)]]
    control: Optional[PlayerIndex] = None

    model_config = {"extra": "forbid"}


class PlayerSnapshot(BaseModel):
    hand: list[CardValue] = Field(default_factory=list, max_length=MAX_HAND_SIZE)
    secret: Optional[CardValue] = None
    discard: Optional[Pair] = None
    gift: Optional[tuple[CardValue, Pair]] = None
    competition: Optional[tuple[Pair, Pair]] = None

    model_config = {"extra": "forbid"}


class RngSnapshot(BaseModel):
    """State of a random.Random, as returned by getstate()."""
    version: int
    internal_state: list[RngWord] = Field(min_length=RNG_STATE_LENGTH, max_length=RNG_STATE_LENGTH)
    gauss_next: Optional[float] = None

    model_config = {"extra": "forbid"}


class GameSnapshot(BaseModel):
    version: int = SNAPSHOT_VERSION
    deck: list[CardValue]
    players: tuple[PlayerSnapshot, PlayerSnapshot]
    places: list[PlaceSnapshot] = Field(min_length=NUM_PLACES, max_length=NUM_PLACES)
    discarded: Optional[CardValue] = None
    current_player: PlayerIndex
    phase: GamePhase
    round_number: int = Field(ge=0)
    winner: Optional[PlayerIndex] = None
    auto_reset: bool = True
    rng: RngSnapshot

    model_config = {"extra": "forbid"}


# =============================================================================
# State <-> schema
# =============================================================================

def _values(cards) -> list[int]:
    return [card.value for card in cards]


def _player_snapshot(player: PlayerState) -> PlayerSnapshot:
    gift = None
    if player.gift is not None:
        given, kept = player.gift
        gift = (given.value, tuple(_values(kept)))
    competition = None
    if player.competition is not None:
        theirs, ours = player.competition
        competition = (tuple(_values(theirs)), tuple(_values(ours)))
    return PlayerSnapshot(
        hand=_values(player.hand),
        secret=player.secret.value if player.secret is not None else None,
        discard=tuple(_values(player.discard)) if player.discard is not None else None,
        gift=gift,
        competition=competition,
    )


def to_snapshot(state: GameState) -> GameSnapshot:
    version, internal_state, gauss_next = state.rng.getstate()
    return GameSnapshot(
        deck=_values(state.deck),
        players=tuple(_player_snapshot(p) for p in state.players),
        places=[
            PlaceSnapshot(
                face_value=place.face_value,
                scores=tuple(place.scores),
                control=place.control.index if place.control is not None else None,
            )
            for place in state.places
        ],
        discarded=state.discarded.value if state.discarded is not None else None,
        current_player=state.current_player.index,
        phase=state.phase,
        round_number=state.round_number,
        winner=state.winner.index if state.winner is not None else None,
        auto_reset=state.auto_reset,
        rng=RngSnapshot(
            version=version,
            internal_state=list(internal_state),
            gauss_next=gauss_next,
        ),
    )


def _pair(values) -> tuple[Card, Card]:
    return (Card(values[0]), Card(values[1]))


def _player_from_snapshot(pid: PlayerId, snap: PlayerSnapshot) -> PlayerState:
    return PlayerState(
        player_id=pid,
        hand=[Card(v) for v in snap.hand],
        secret=Card(snap.secret) if snap.secret is not None else None,
        discard=_pair(snap.discard) if snap.discard is not None else None,
        gift=(Card(snap.gift[0]), _pair(snap.gift[1])) if snap.gift is not None else None,
        competition=(
            (_pair(snap.competition[0]), _pair(snap.competition[1]))
            if snap.competition is not None
            else None
        ),
    )


def from_snapshot(snap: GameSnapshot) -> GameState:
    """Rebuild a GameState with fresh card identities."""
    if tuple(p.face_value for p in snap.places) != PLACE_VALUES:
        raise SnapshotError("Place face values do not match the board")

    rng = random.Random()
    try:
        rng.setstate((snap.rng.version, tuple(snap.rng.internal_state), snap.rng.gauss_next))
    except (TypeError, ValueError, OverflowError) as e:
        raise SnapshotError(f"Invalid random state: {e}") from e

    state = GameState(
        deck=[Card(v) for v in snap.deck],
        players=[
            _player_from_snapshot(PlayerId.FIRST, snap.players[0]),
            _player_from_snapshot(PlayerId.SECOND, snap.players[1]),
        ],
        places=[
            Place(
                p.face_value,
                scores=[p.scores[0], p.scores[1]],
                control=PlayerId.of_index(p.control) if p.control is not None else None,
            )
            for p in snap.places
        ],
        rng=rng,
        current_player=PlayerId.of_index(snap.current_player),
        discarded=Card(snap.discarded) if snap.discarded is not None else None,
        phase=snap.phase,
        round_number=snap.round_number,
        winner=PlayerId.of_index(snap.winner) if snap.winner is not None else None,
        auto_reset=snap.auto_reset,
    )

    counts = count_values(state.iter_cards())
    expected = full_deck_counts()
    if counts != expected:
        raise SnapshotError(
            "Snapshot cards do not form a complete deck",
            errors=[
                f"value {v}: expected {expected[v]}, got {counts[v]}"
                for v in range(NUM_PLACES)
                if counts[v] != expected[v]
            ],
        )

    problems = _phase_problems(state)
    if problems:
        raise SnapshotError("Snapshot phase does not match its contents", errors=problems)
    return state


def _phase_problems(state: GameState) -> list[str]:
    problems = []
    if state.winner is not None and state.phase != GamePhase.GAME_OVER:
        problems.append(f"winner set in phase {state.phase.value}")
    if state.phase == GamePhase.SETUP:
        for p in state.players:
            if p.hand or p.committed_cards():
                problems.append(f"{p.name} holds cards before the first deal")
    elif state.phase == GamePhase.PLAYING and not state.current.hand:
        problems.append(f"{state.current.name} has no cards on their turn")
    return problems


# =============================================================================
# Binary codec
# =============================================================================

def encode_state(state: GameState) -> bytes:
    payload = to_snapshot(state).model_dump_json().encode("utf-8")
    return SNAPSHOT_MAGIC + bytes([SNAPSHOT_VERSION]) + zlib.compress(payload)


def decode_state(data: bytes) -> GameState:
    header_len = len(SNAPSHOT_MAGIC) + 1
    if len(data) < header_len or data[: len(SNAPSHOT_MAGIC)] != SNAPSHOT_MAGIC:
        raise SnapshotError("Not a game snapshot")
    version = data[len(SNAPSHOT_MAGIC)]
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version {version} (expected {SNAPSHOT_VERSION})")

    try:
        payload = zlib.decompress(data[header_len:])
    except zlib.error as e:
        raise SnapshotError(f"Corrupt snapshot payload: {e}") from e

    try:
        snap = GameSnapshot.model_validate_json(payload)
    except ValidationError as e:
        raise SnapshotError(
            "Snapshot failed validation",
            errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
        ) from e

    return from_snapshot(snap)
