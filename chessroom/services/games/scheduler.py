import threading
from typing import Callable


class ScheduledTask:
    """Handle for a recurring callback; `cancel()` stops future runs."""

    def __init__(self) -> None:
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


class SocketIOScheduler:
    """Runs recurring callbacks as Socket.IO background tasks.

    Uses `socketio.sleep` so it cooperates with whichever async mode
    (threading, eventlet, gevent) the server runs under.
    """

    def __init__(self, socketio, logger=None) -> None:
        self.socketio = socketio
        self.logger = logger

    def every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask()

        def _worker():
            while True:
                self.socketio.sleep(interval)
                if task.cancelled:
                    if self.logger:
                        self.logger.debug("[timer-abort] task cancelled")
                    return
                try:
                    callback()
                except Exception:
                    if self.logger:
                        self.logger.exception("[timer-error] recurring callback failed")

        if self.logger:
            self.logger.info(f"[timer-set] interval={interval}s")
        self.socketio.start_background_task(_worker)
        return task
