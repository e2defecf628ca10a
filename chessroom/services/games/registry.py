from typing import Dict, List, Optional

from .types import Role, Side


class ConnectionRegistry:
    """Tracks live connections and which of them hold the two player slots."""

    def __init__(self) -> None:
        self._slots: Dict[Side, Optional[str]] = {Side.FIRST: None, Side.SECOND: None}
        # insertion-ordered: arrival order of live connections
        self._connections: Dict[str, None] = {}

    def on_connect(self, sid: str) -> Role:
        self._connections[sid] = None
        for side in (Side.FIRST, Side.SECOND):
            if self._slots[side] is None:
                self._slots[side] = sid
                return Role.for_side(side)
        return Role.OBSERVER

    def on_disconnect(self, sid: str) -> Role:
        """Forget `sid` and free its slot. Returns the role it held."""
        role = self.role_of(sid)
        self._connections.pop(sid, None)
        if role.side is not None:
            self._slots[role.side] = None
        return role

    def role_of(self, sid: str) -> Role:
        for side, holder in self._slots.items():
            if holder is not None and holder == sid:
                return Role.for_side(side)
        return Role.OBSERVER

    def holder(self, side: Side) -> Optional[str]:
        return self._slots[side]

    def both_occupied(self) -> bool:
        return all(holder is not None for holder in self._slots.values())

    def occupancy(self) -> Dict[str, bool]:
        return {side.value: holder is not None for side, holder in self._slots.items()}

    def connections(self) -> List[str]:
        return list(self._connections)

    def observer_count(self) -> int:
        return sum(1 for sid in self._connections if self.role_of(sid) is Role.OBSERVER)

    def __contains__(self, sid: str) -> bool:
        return sid in self._connections

    def __len__(self) -> int:
        return len(self._connections)
