from abc import ABC, abstractmethod
from typing import Any

from .registry import ConnectionRegistry


class Broadcaster(ABC):
    """Fan-out of server events to connections known to the registry.

    A failed send to one connection is logged and skipped so the remaining
    connections still receive the event.
    """

    def __init__(self, registry: ConnectionRegistry, logger=None) -> None:
        self.registry = registry
        self.logger = logger

    def send(self, sid: str, event: str, payload: Any) -> bool:
        try:
            self._emit(sid, event, payload)
            return True
        except Exception as exc:
            if self.logger:
                self.logger.warning(f"[emit-failed] sid={sid} event={event} error={exc}")
            return False

    def broadcast(self, event: str, payload: Any) -> int:
        delivered = 0
        for sid in self.registry.connections():
            if self.send(sid, event, payload):
                delivered += 1
        return delivered

    @abstractmethod
    def _emit(self, sid: str, event: str, payload: Any) -> None:
        """Deliver one event to one connection; raise if it cannot."""


class SocketIOBroadcaster(Broadcaster):
    def __init__(self, socketio, registry: ConnectionRegistry, namespace: str = '/', logger=None) -> None:
        super().__init__(registry, logger=logger)
        self.socketio = socketio
        self.namespace = namespace

    def _emit(self, sid: str, event: str, payload: Any) -> None:
        # socketio.emit works from background tasks as well as handlers
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)
