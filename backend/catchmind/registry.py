import threading
import time
from typing import Dict, List, Optional

from catchmind.models import Room


class RoomRegistry:
    """Owns every Room of this process.

    Rooms are created on first reference and kept until reaped. Handlers hold
    ``lock`` for the whole of one event so room mutations never interleave.
    """

    def __init__(self, clock=time.monotonic):
        self._rooms: Dict[str, Room] = {}
        self._clock = clock
        self.lock = threading.RLock()

    def ensure_room(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id, clock=self._clock)
            self._rooms[room_id] = room
        return room

    def get(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def remove_connection(self, connection_id: str) -> List[Room]:
        """Drop a connection from every room it belongs to.

        Returns the rooms it was removed from. The presenter role is left
        untouched.
        """
        affected = []
        for room in self._rooms.values():
            if room.remove_player(connection_id):
                affected.append(room)
        return affected

    def reap_idle(self, ttl: float, now: Optional[float] = None) -> List[str]:
        """Forget empty rooms with no activity for ``ttl`` seconds."""
        if ttl <= 0:
            return []
        now = self._clock() if now is None else now
        reaped = [
            room_id for room_id, room in self._rooms.items()
            if not room.players and now - room.last_activity >= ttl
        ]
        for room_id in reaped:
            del self._rooms[room_id]
        return reaped

    def __contains__(self, room_id):
        return room_id in self._rooms

    def __len__(self):
        return len(self._rooms)
