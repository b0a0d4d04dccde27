import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .colors import generate_hex_code

ROOM_CAPACITY = 2


@dataclass
class Result:
    won: bool = False
    elapsed_seconds: int = 0
    submitted: bool = False


@dataclass
class Room:
    room_id: str
    target_color: str
    players: List[str] = field(default_factory=list)
    results: Dict[str, Result] = field(default_factory=dict)
    finished_count: int = 0
    closed: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def channel(self) -> str:
        # socket.io room name used for broadcasts to this room's participants
        return f"room:{self.room_id}"

    @property
    def is_full(self) -> bool:
        return len(self.players) >= ROOM_CAPACITY

    @property
    def status(self) -> str:
        return 'active' if self.is_full else 'waiting'

    def slot_of(self, sid: str) -> Optional[int]:
        """1-based position of sid in the room, or None if not seated."""
        try:
            return self.players.index(sid) + 1
        except ValueError:
            return None


class RoomRegistry:
    """In-memory map of room id -> Room.

    Nothing is persisted; rooms only live as long as the process.
    """

    def __init__(self, color_factory: Callable[[], str] = generate_hex_code):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.RLock()
        self._color_factory = color_factory

    def get_or_create(self, room_id: str) -> Room:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                room = Room(room_id=room_id, target_color=self._color_factory())
                self._rooms[room_id] = room
            return room

    def get(self, room_id: str) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(room_id)

    def remove(self, room_id: str) -> None:
        with self._lock:
            room = self._rooms.pop(room_id, None)
            if room is not None:
                room.closed = True

    def find_room_containing(self, sid: str) -> Optional[Room]:
        with self._lock:
            for room in self._rooms.values():
                if sid in room.players:
                    return room
        return None

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def __contains__(self, room_id: str) -> bool:
        with self._lock:
            return room_id in self._rooms

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)
