import logging
import threading
from typing import Any, Optional

from chessroom.exceptions import RulesEngineError
from .broadcast import Broadcaster
from .clock import Clock
from .session import GameSession
from .types import (
    Applied,
    ClockState,
    GameStatus,
    MoveRequest,
    Phase,
    Reason,
    Role,
    Side,
    TerminalReason,
)


class SessionCoordinator:
    """Authoritative state machine for the one game hosted by this process.

    Waiting -> InProgress (first accepted move) -> Over (terminal).

    Every public handler runs under a single re-entrant lock shared with the
    clock, so connection events, move requests and ticks are processed one at
    a time and each runs to completion before the next starts.
    """

    def __init__(
        self,
        session: GameSession,
        broadcaster: Broadcaster,
        scheduler,
        tick_interval: float = 1.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.session = session
        self.broadcaster = broadcaster
        self.logger = logger or logging.getLogger(__name__)
        self.lock = threading.RLock()
        self.clock = Clock(
            session,
            scheduler,
            on_update=self._broadcast_clock,
            on_timeout=self.handle_clock_timeout,
            interval=tick_interval,
            logger=self.logger,
        )
        self.clock.set_lock(self.lock)

    # --- Connection lifecycle ---

    def handle_connect(self, sid: str) -> Role:
        with self.lock:
            role = self.session.registry.on_connect(sid)
            self.logger.info(f"[connect] sid={sid} role={role} connections={len(self.session.registry)}")
            self._send_snapshot(sid, role)
            return role

    def handle_disconnect(self, sid: str) -> None:
        # A vacated slot freezes the clock; the game itself waits for a new player.
        with self.lock:
            role = self.session.registry.on_disconnect(sid)
            self.logger.info(f"[disconnect] sid={sid} role={role} connections={len(self.session.registry)}")

    def handle_sync(self, sid: str) -> None:
        with self.lock:
            if sid not in self.session.registry:
                return
            self._send_snapshot(sid, self.session.registry.role_of(sid))

    # --- Moves ---

    def handle_move_request(self, sid: str, payload: Any) -> bool:
        """Arbitrate one move request. Returns True when the move was applied."""
        with self.lock:
            session = self.session

            if session.status.is_over:
                return self._reject(sid, payload, 'game is over')

            role = session.registry.role_of(sid)
            if role.side is None or role.side is not session.side_to_move:
                return self._reject(sid, payload, f'not your turn (role={role}, to_move={session.side_to_move})')

            request = MoveRequest.from_payload(payload)
            if request is None:
                return self._reject(sid, payload, 'malformed move')

            mover = session.side_to_move
            try:
                outcome = session.engine.try_apply_move(request)
            except RulesEngineError:
                self.logger.exception(f"[rules-error] sid={sid} move={request.to_payload()}")
                self._finish(GameStatus.over(Reason.OTHER))
                return False

            if not isinstance(outcome, Applied):
                return self._reject(sid, payload, outcome.detail)

            session.side_to_move = session.engine.side_to_move()
            self.logger.info(
                f"[move-accepted] sid={sid} side={mover} move={request.to_payload()} to_move={session.side_to_move}"
            )
            if session.status.phase is Phase.WAITING:
                session.status = GameStatus(phase=Phase.IN_PROGRESS)
                self.clock.start()

            self.broadcaster.broadcast('position', outcome.position)
            self.broadcaster.broadcast('move', request.to_payload())

            if outcome.is_terminal:
                if outcome.terminal_reason is TerminalReason.CHECKMATE:
                    self._finish(GameStatus.over(Reason.CHECKMATE, winner=mover))
                else:
                    self._finish(GameStatus.over(Reason.DRAW))
            return True

    # --- Clock ---

    def handle_clock_timeout(self, losing_side: Side) -> None:
        with self.lock:
            if self.session.status.is_over:
                self.logger.debug(f"[late-timeout] side={losing_side} status={self.session.status}")
                return
            self._finish(GameStatus.over(Reason.TIMEOUT, winner=losing_side.other))

    # --- Read-only view ---

    def snapshot(self) -> dict:
        with self.lock:
            session = self.session
            status = session.status
            return {
                'status': status.phase.value,
                'reason': status.reason.value if status.reason else None,
                'winner': status.winner.value if status.winner else None,
                'position': session.engine.current_position(),
                'side_to_move': session.side_to_move.value,
                'clock': session.clock.to_dict(),
                'clock_running': self.clock.active,
                'slots': session.registry.occupancy(),
                'observers': session.registry.observer_count(),
            }

    # --- Internal helpers ---

    def _send_snapshot(self, sid: str, role: Role) -> None:
        self.broadcaster.send(sid, 'role', role.value)
        self.broadcaster.send(sid, 'position', self.session.engine.current_position())
        self.broadcaster.send(sid, 'clock', self.session.clock.to_dict())

    def _reject(self, sid: str, payload: Any, detail: str) -> bool:
        self.logger.info(f"[move-rejected] sid={sid} detail={detail}")
        self.broadcaster.send(sid, 'invalidMove', payload)
        return False

    def _finish(self, status: GameStatus) -> None:
        if self.session.status.is_over:
            return
        self.session.status = status
        self.clock.stop()
        self.logger.info(f"[game-over] reason={status.reason} winner={status.winner}")
        self.broadcaster.broadcast('gameOver', status.game_over_payload())

    def _broadcast_clock(self, clock: ClockState) -> None:
        self.broadcaster.broadcast('clock', clock.to_dict())
