import time
from typing import Any, Dict, List, Optional


class Player:
    def __init__(self, connection_id: str, name: str, score: int = 0):
        self.connection_id = connection_id
        self.name = name
        self.score = score

    def to_dict(self):
        return {
            'socketId': self.connection_id,
            'name': self.name,
            'score': self.score,
        }

    def __repr__(self):
        return f"<Player {self.connection_id} {self.name!r} score={self.score}>"


class Room:
    """In-memory state of one drawing room.

    ``players`` keeps join order, which drives presenter rotation.
    ``presenter_id`` and ``secret`` only change together through
    :meth:`set_round`.
    """

    def __init__(self, room_id: str, clock=time.monotonic):
        self.id = room_id
        self.players: Dict[str, Player] = {}
        self.strokes: List[Any] = []
        self._presenter_id: Optional[str] = None
        self._secret: Optional[str] = None
        self._clock = clock
        self.last_activity = clock()

    @property
    def presenter_id(self) -> Optional[str]:
        return self._presenter_id

    @property
    def secret(self) -> Optional[str]:
        return self._secret

    def set_round(self, presenter_id: str, secret: str) -> None:
        if not presenter_id or not secret:
            raise ValueError('presenter and secret must be set together')
        self._presenter_id = presenter_id
        self._secret = secret

    def add_player(self, connection_id: str, name: str) -> Player:
        player = self.players.get(connection_id)
        if player:
            # Rejoin keeps score and seat
            player.name = name
        else:
            player = Player(connection_id, name)
            self.players[connection_id] = player
        return player

    def remove_player(self, connection_id: str) -> Optional[Player]:
        return self.players.pop(connection_id, None)

    def presenter(self) -> Optional[Player]:
        if not self._presenter_id:
            return None
        return self.players.get(self._presenter_id)

    def touch(self) -> None:
        self.last_activity = self._clock()

    def to_dict(self):
        # Never include the secret itself
        return {
            'players': [p.to_dict() for p in self.players.values()],
            'shapes': list(self.strokes),
            'currentWord': self._secret is not None,
            'roundOwner': self._presenter_id,
        }

    def __repr__(self):
        return f"<Room {self.id} players={len(self.players)} presenter={self._presenter_id}>"
