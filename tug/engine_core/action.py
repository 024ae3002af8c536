"""
Action System - Actions and results.

An action names card VALUES, never hand positions; the reducer locates
and removes matching cards. The four shapes:

- SECRET:      for_player = (card,)          from the actor's hand
- DISCARD:     for_player = (a, b)           from the actor's hand
- GIFT:        for_player = (a, b), for_other = (c,)
               all three from the actor's hand; a and b score for the
               actor, c scores for the opponent
- COMPETITION: for_player = (a, b) from the actor's hand,
               for_other = (c, d) from the opponent's hand;
               each pair scores for the player whose hand it came from
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable

from .constants import NUM_PLACES
from .errors import InvalidActionError
from .types import ActionType


# Number of values named in (for_player, for_other)
CARD_COUNTS: dict[ActionType, tuple[int, int]] = {
    ActionType.SECRET: (1, 0),
    ActionType.DISCARD: (2, 0),
    ActionType.GIFT: (2, 1),
    ActionType.COMPETITION: (2, 2),
}


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Construction validates the payload shape, so a malformed action
    fails where it is built rather than when it is applied.
    """
    action_type: ActionType
    for_player: tuple[int, ...]
    for_other: tuple[int, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "for_player", tuple(self.for_player))
        object.__setattr__(self, "for_other", tuple(self.for_other))

        expected = CARD_COUNTS[self.action_type]
        actual = (len(self.for_player), len(self.for_other))
        if actual != expected:
            raise InvalidActionError(
                f"{self.action_type.value} names {expected[0]}+{expected[1]} cards, got {actual[0]}+{actual[1]}"
            )
        for value in self.cards:
            if not isinstance(value, int) or not 0 <= value < NUM_PLACES:
                raise InvalidActionError(f"Card value must be in 0..{NUM_PLACES - 1}, got {value!r}")

    @property
    def cards(self) -> tuple[int, ...]:
        return self.for_player + self.for_other

    @classmethod
    def secret(cls, card: int) -> Action:
        """Factory for secret action."""
        return cls(ActionType.SECRET, (card,))

    @classmethod
    def discard(cls, first: int, second: int) -> Action:
        """Factory for discard action."""
        return cls(ActionType.DISCARD, (first, second))

    @classmethod
    def gift(cls, for_player: Iterable[int], for_other: int) -> Action:
        """Factory for gift action."""
        return cls(ActionType.GIFT, tuple(for_player), (for_other,))

    @classmethod
    def competition(cls, for_player: Iterable[int], for_other: Iterable[int]) -> Action:
        """Factory for competition action."""
        return cls(ActionType.COMPETITION, tuple(for_player), tuple(for_other))

    def describe(self) -> str:
        """Human-readable one-liner."""
        if self.action_type == ActionType.SECRET:
            return f"secret {self.for_player[0]}"
        if self.action_type == ActionType.DISCARD:
            return f"discard {self.for_player[0]} {self.for_player[1]}"
        if self.action_type == ActionType.GIFT:
            return f"gift keeps {list(self.for_player)} gives {self.for_other[0]}"
        return f"competition keeps {list(self.for_player)} takes {list(self.for_other)}"


@dataclass
class ActionResult:
    """
    Result of applying an action through the reducer.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Human-readable changes, and the round evaluation if the action
      closed a round
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    state_changes: list[str] = field(default_factory=list)
    round_result: Any | None = None  # RoundResult

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        round_result: Any | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            round_result=round_result,
        )
