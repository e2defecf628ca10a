import threading
from typing import Callable, Optional

from .scheduler import ScheduledTask
from .session import GameSession
from .types import ClockState, Side


class Clock:
    """Per-side countdown driven by a recurring tick.

    Time only runs while both player slots are occupied, and always for the
    side the session says is to move at tick time.
    """

    def __init__(
        self,
        session: GameSession,
        scheduler,
        on_update: Callable[[ClockState], None],
        on_timeout: Callable[[Side], None],
        interval: float = 1.0,
        logger=None,
    ) -> None:
        self.session = session
        self.scheduler = scheduler
        self.on_update = on_update
        self.on_timeout = on_timeout
        self.interval = interval
        self.logger = logger
        self.lock = threading.RLock()
        self.active = False
        self._task: Optional[ScheduledTask] = None

    def set_lock(self, lock: threading.RLock) -> None:
        """Share the coordinator's lock so ticks never interleave with moves."""
        self.lock = lock

    @property
    def scheduled(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        with self.lock:
            if self._task is not None:
                return
            self.active = True
            self._task = self.scheduler.every(self.interval, self.on_tick)
            if self.logger:
                self.logger.info(f"[clock-start] first={self.session.clock.first} second={self.session.clock.second}")

    def stop(self) -> None:
        with self.lock:
            was_active = self.active
            self.active = False
            if self._task is not None:
                self._task.cancel()
            if was_active and self.logger:
                self.logger.info(f"[clock-stop] first={self.session.clock.first} second={self.session.clock.second}")

    def on_tick(self) -> None:
        with self.lock:
            if not self.active:
                return
            if not self.session.registry.both_occupied():
                return
            side = self.session.side_to_move
            remaining = self.session.clock.decrement(side)
            self.on_update(self.session.clock)
            if remaining <= 0:
                self.stop()
                if self.logger:
                    self.logger.info(f"[clock-timeout] side={side}")
                self.on_timeout(side)
