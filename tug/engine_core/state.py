"""
Game State - The canonical state the engine operates on.

Design principles:
- Conservation: every card is in exactly one container at all times
  (deck, a hand, a commitment slot, or the discard)
- Single owner: the state owns its random source; clones get a copy
- Serializable: clone() is a full encode/decode round trip
- All action logic lives in the reducer; this module holds the data
  and the round lifecycle
"""

from __future__ import annotations
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from .cards import Card, build_deck, count_values, draw, shuffle
from .constants import HAND_SIZE, PLACE_VALUES
from .errors import RoundInProgressError
from .scoring import RoundResult, evaluate
from .types import ActionType, GamePhase, PlayerId

if TYPE_CHECKING:
    from .action import Action
    from .view import PlayerView


class Place:
    """
    One of the seven contested places.

    The face value is fixed at construction; it is both the value of the
    place in points and the number of cards of its type in the deck.
    """

    def __init__(
        self,
        face_value: int,
        scores: list[int] | None = None,
        control: PlayerId | None = None,
    ):
        self._face_value = face_value
        self.scores = scores if scores is not None else [0, 0]
        self.control = control

    @property
    def face_value(self) -> int:
        return self._face_value

    def add_score(self, pid: PlayerId, count: int = 1) -> None:
        self.scores[pid.index] += count

    def reset_scores(self) -> None:
        self.scores = [0, 0]

    def __eq__(self, other):
        if not isinstance(other, Place):
            return NotImplemented
        return (
            self._face_value == other._face_value
            and self.scores == other.scores
            and self.control == other.control
        )

    def __repr__(self) -> str:
        control = self.control.label if self.control else None
        return f"Place(face_value={self._face_value}, scores={self.scores}, control={control})"


# Commitment slot attribute for each action type, in drain order
SLOT_NAMES: dict[ActionType, str] = {
    ActionType.SECRET: "secret",
    ActionType.DISCARD: "discard",
    ActionType.GIFT: "gift",
    ActionType.COMPETITION: "competition",
}


@dataclass
class PlayerState:
    """
    A player's hand plus the four round-scoped commitment slots.

    A slot is empty until the matching action is taken and then holds
    exactly the cards that action removed:
    - secret: the card set aside
    - discard: the two cards discarded
    - gift: (card given to the opponent, (two cards kept))
    - competition: ((opponent's two cards), (own two cards))
    """
    player_id: PlayerId
    hand: list[Card] = field(default_factory=list)
    secret: Card | None = None
    discard: tuple[Card, Card] | None = None
    gift: tuple[Card, tuple[Card, Card]] | None = None
    competition: tuple[tuple[Card, Card], tuple[Card, Card]] | None = None

    @property
    def name(self) -> str:
        return self.player_id.label

    @property
    def hand_values(self) -> list[int]:
        return [card.value for card in self.hand]

    def has_used(self, action_type: ActionType) -> bool:
        return getattr(self, SLOT_NAMES[action_type]) is not None

    def available_actions(self) -> list[ActionType]:
        """Action types not yet used this round."""
        return [a for a in ActionType if not self.has_used(a)]

    @property
    def round_complete(self) -> bool:
        return all(self.has_used(a) for a in ActionType)

    def committed_cards(self) -> list[Card]:
        """All cards in commitment slots, in slot order secret, discard, gift, competition."""
        cards: list[Card] = []
        if self.secret is not None:
            cards.append(self.secret)
        if self.discard is not None:
            cards.extend(self.discard)
        if self.gift is not None:
            given, kept = self.gift
            cards.append(given)
            cards.extend(kept)
        if self.competition is not None:
            theirs, ours = self.competition
            cards.extend(theirs)
            cards.extend(ours)
        return cards

    def drain(self) -> list[Card]:
        """Empty every commitment slot and the hand, returning their cards."""
        cards = self.committed_cards() + self.hand
        self.hand = []
        self.secret = None
        self.discard = None
        self.gift = None
        self.competition = None
        return cards


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Use GameState.new() to start a game and reset() to deal each round.
    All actions go through apply_action().
    """
    deck: list[Card]
    players: list[PlayerState]
    places: list[Place]
    rng: random.Random
    current_player: PlayerId
    discarded: Card | None = None

    phase: GamePhase = GamePhase.SETUP
    round_number: int = 0
    winner: PlayerId | None = None
    auto_reset: bool = True

    # Not part of snapshots
    last_round: RoundResult | None = None
    action_history: list[Action] = field(default_factory=list)

    @classmethod
    def new(
        cls,
        rng: random.Random | None = None,
        seed: int | None = None,
        auto_reset: bool = True,
    ) -> GameState:
        """
        Build the deck, shuffle, set one card aside and pick who starts.

        The returned state is undealt; call reset() to deal the first round.
        """
        if rng is None:
            rng = random.Random(seed)
        current_player = PlayerId.of_index(rng.randrange(2))
        deck = build_deck(PLACE_VALUES)
        shuffle(deck, rng)
        discarded = draw(deck)
        return cls(
            deck=deck,
            players=[PlayerState(PlayerId.FIRST), PlayerState(PlayerId.SECOND)],
            places=[Place(value) for value in PLACE_VALUES],
            rng=rng,
            current_player=current_player,
            discarded=discarded,
            auto_reset=auto_reset,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def player(self, pid: PlayerId) -> PlayerState:
        return self.players[pid.index]

    @property
    def current(self) -> PlayerState:
        """The player whose turn it is."""
        return self.players[self.current_player.index]

    @property
    def opponent(self) -> PlayerState:
        """The player waiting for their turn."""
        return self.players[self.current_player.other().index]

    def hand_values(self, pid: PlayerId) -> list[int]:
        return self.player(pid).hand_values

    def available_actions(self, pid: PlayerId | None = None) -> list[ActionType]:
        """Action types the player (default: current) can still take this round."""
        if self.phase != GamePhase.PLAYING:
            return []
        return self.player(pid if pid is not None else self.current_player).available_actions()

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def round_closed(self) -> bool:
        return all(p.round_complete for p in self.players)

    def iter_cards(self) -> Iterator[Card]:
        """Every card the game owns, wherever it is."""
        yield from self.deck
        for p in self.players:
            yield from p.hand
            yield from p.committed_cards()
        if self.discarded is not None:
            yield self.discarded

    def card_counts(self) -> Counter:
        return count_values(self.iter_cards())

    def view_for(self, pid: PlayerId) -> PlayerView:
        """What the given player is allowed to see."""
        from .view import PlayerView

        return PlayerView.of(self, pid)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply_action(self, action: Action) -> RoundResult | None:
        """
        Apply an action for the current player.

        Raises an ActionError subclass, leaving the state untouched, if
        the action is illegal. Returns the RoundResult if this action
        closed the round, else None.
        """
        from .reducer import commit_action

        commit_action(self, action)
        self.action_history.append(action)
        self.current_player = self.current_player.other()

        if self.round_closed:
            return self._finish_round()

        self._begin_turn()
        return None

    def reset(self) -> None:
        """
        Collect every card, reshuffle and deal a new round.

        Only valid before the first round or after a round ended without
        a winner.
        """
        if self.phase not in (GamePhase.SETUP, GamePhase.ROUND_OVER):
            raise RoundInProgressError(f"Cannot reset during phase {self.phase.value}")
        if self.phase == GamePhase.ROUND_OVER and self.deck:
            raise RoundInProgressError(f"Cannot reset with {len(self.deck)} card(s) left in the deck")

        if self.discarded is not None:
            self.deck.append(self.discarded)
            self.discarded = None
        for p in self.players:
            self.deck.extend(p.drain())
        for place in self.places:
            place.reset_scores()

        shuffle(self.deck, self.rng)
        self.discarded = draw(self.deck)
        for p in self.players:
            for _ in range(HAND_SIZE):
                p.hand.append(draw(self.deck))

        self.round_number += 1
        self.phase = GamePhase.PLAYING
        self._begin_turn()

    def update_control_and_score(self) -> RoundResult:
        """Score the places and decide whether someone won."""
        return evaluate(self.places, self.round_number)

    def _begin_turn(self) -> None:
        # The player to act draws one card while the deck lasts
        if self.deck:
            self.current.hand.append(draw(self.deck))

    def _finish_round(self) -> RoundResult:
        result = self.update_control_and_score()
        self.last_round = result
        if result.winner is not None:
            self.winner = result.winner
            self.phase = GamePhase.GAME_OVER
            return result

        self.phase = GamePhase.ROUND_OVER
        if self.auto_reset:
            self.reset()
        return result

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        from .snapshot import encode_state

        return encode_state(self)

    @classmethod
    def from_bytes(cls, data: bytes) -> GameState:
        from .snapshot import decode_state

        return decode_state(data)

    def clone(self) -> GameState:
        """Deep, independent copy through a full encode/decode round trip."""
        copy = GameState.from_bytes(self.to_bytes())
        # RoundResult and Action are frozen
        copy.last_round = self.last_round
        copy.action_history = list(self.action_history)
        return copy
