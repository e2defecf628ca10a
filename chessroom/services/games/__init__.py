"""Game domain services: connection registry, clocks, rules adapter and the
session coordinator.

Everything here is transport-agnostic; Socket.IO handlers and HTTP routes
only call into `SessionCoordinator`.
"""

from .broadcast import Broadcaster, SocketIOBroadcaster
from .coordinator import SessionCoordinator
from .scheduler import SocketIOScheduler
from .session import GameSession

__all__ = [
    'Broadcaster',
    'GameSession',
    'SessionCoordinator',
    'SocketIOBroadcaster',
    'SocketIOScheduler',
]
