"""
Type definitions shared by the registry, clock, rules adapter and coordinator.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Mapping, Optional, Union


class Side(StrEnum):
    FIRST = "first"
    SECOND = "second"

    @property
    def other(self) -> "Side":
        return Side.SECOND if self is Side.FIRST else Side.FIRST


class Role(StrEnum):
    FIRST_PLAYER = "first-player"
    SECOND_PLAYER = "second-player"
    OBSERVER = "observer"

    @classmethod
    def for_side(cls, side: Side) -> "Role":
        return cls.FIRST_PLAYER if side is Side.FIRST else cls.SECOND_PLAYER

    @property
    def side(self) -> Optional[Side]:
        """Side this role may move for; observers have none."""
        if self is Role.FIRST_PLAYER:
            return Side.FIRST
        if self is Role.SECOND_PLAYER:
            return Side.SECOND
        return None


class Phase(StrEnum):
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    OVER = "over"


class Reason(StrEnum):
    CHECKMATE = "Checkmate"
    DRAW = "Draw"
    TIMEOUT = "Timeout"
    OTHER = "Other"


class TerminalReason(StrEnum):
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    OTHER_DRAW = "other_draw"


@dataclass(frozen=True)
class GameStatus:
    phase: Phase = Phase.WAITING
    reason: Optional[Reason] = None
    winner: Optional[Side] = None

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.OVER

    @classmethod
    def over(cls, reason: Reason, winner: Optional[Side] = None) -> "GameStatus":
        return cls(phase=Phase.OVER, reason=reason, winner=winner)

    def game_over_payload(self) -> dict:
        return {
            'winner': self.winner.value if self.winner else 'none',
            'reason': self.reason.value if self.reason else Reason.OTHER.value,
        }


@dataclass
class ClockState:
    """Remaining whole seconds per side."""

    first: int
    second: int

    def remaining(self, side: Side) -> int:
        return self.first if side is Side.FIRST else self.second

    def decrement(self, side: Side) -> int:
        if side is Side.FIRST:
            self.first = max(0, self.first - 1)
        else:
            self.second = max(0, self.second - 1)
        return self.remaining(side)

    def to_dict(self) -> dict:
        return {'first': self.first, 'second': self.second}


@dataclass(frozen=True)
class MoveRequest:
    from_square: str
    to_square: str
    promotion: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["MoveRequest"]:
        """Build a request from the client's `{from, to, promotion}` mapping.

        Returns None when the payload is not shaped like a move at all.
        """
        if not isinstance(payload, Mapping):
            return None
        from_square = payload.get('from')
        to_square = payload.get('to')
        promotion = payload.get('promotion')
        if not isinstance(from_square, str) or not isinstance(to_square, str):
            return None
        if promotion is not None and not isinstance(promotion, str):
            return None
        return cls(from_square=from_square, to_square=to_square, promotion=promotion or None)

    def to_payload(self) -> dict:
        payload = {'from': self.from_square, 'to': self.to_square}
        if self.promotion:
            payload['promotion'] = self.promotion
        return payload


@dataclass(frozen=True)
class Applied:
    position: str
    is_terminal: bool = False
    terminal_reason: Optional[TerminalReason] = None


@dataclass(frozen=True)
class Rejected:
    detail: str = ''


MoveOutcome = Union[Applied, Rejected]
