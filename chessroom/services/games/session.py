from dataclasses import dataclass, field
from typing import Optional

from .registry import ConnectionRegistry
from .rules import RulesEngine
from .types import ClockState, GameStatus, Side


@dataclass
class GameSession:
    """All mutable state of the single game this process hosts."""

    registry: ConnectionRegistry
    engine: RulesEngine
    clock: ClockState
    side_to_move: Side = Side.FIRST
    status: GameStatus = field(default_factory=GameStatus)

    @classmethod
    def new(cls, clock_seconds: int, start_fen: Optional[str] = None) -> "GameSession":
        engine = RulesEngine(start_fen)
        return cls(
            registry=ConnectionRegistry(),
            engine=engine,
            clock=ClockState(first=clock_seconds, second=clock_seconds),
            side_to_move=engine.side_to_move(),
        )
