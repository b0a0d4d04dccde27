import logging
from dataclasses import dataclass
from typing import Optional

from .registry import ROOM_CAPACITY, Result, Room, RoomRegistry
from .resolution import Outcome, resolve_match

JOINED_TEXT = '{sid} has joined the room'
WAITING_TEXT = 'Waiting for another player to join...'
GAME_START_TEXT = 'Both players have joined. The game is starting now.'
ROOM_FULL_TEXT = 'Room {room} is full. Try a different room name.'
PLAYER_LEFT_TEXT = 'Your opponent has left the room.'


@dataclass(frozen=True)
class MatchReport:
    """Everything known about a match once it has been resolved."""
    room_id: str
    target_color: str
    player1: Result
    player2: Result
    outcome: Outcome


class MatchCoordinator:
    """Runs the versus protocol on top of a RoomRegistry.

    The coordinator never talks to the transport directly; all outbound
    messages go through ``notifier``, which must provide
    ``send(event, data, to, skip=None)``, ``enter(sid, channel)`` and
    ``close(channel)``.

    Every mutation of a room happens while holding ``room.lock``.
    """

    def __init__(self, registry: RoomRegistry, notifier, logger=None):
        self.registry = registry
        self.notifier = notifier
        self.logger = logger or logging.getLogger(__name__)

    # ---- join ----

    def join(self, room_id: str, sid: str) -> Optional[int]:
        """Seat sid in room_id and return its slot number, or None if refused."""
        if not room_id:
            self.notifier.send('error', {'message': 'room is required'}, to=sid)
            return None
        current = self.registry.find_room_containing(sid)
        if current is not None:
            self.notifier.send('error', {'message': f'already in room {current.room_id}'}, to=sid)
            return None

        while True:
            existed = room_id in self.registry
            room = self.registry.get_or_create(room_id)
            with room.lock:
                if room.closed:
                    # resolved or emptied between lookup and lock; look again
                    continue
                if not existed:
                    self.logger.info(f"[room-open] room={room_id}")
                if room.is_full:
                    self.logger.info(f"[room-full] room={room_id} sid={sid}")
                    self.notifier.send('roomFull', ROOM_FULL_TEXT.format(room=room_id), to=sid)
                    return None
                return self._seat(room, sid)

    def _seat(self, room: Room, sid: str) -> int:
        room.players.append(sid)
        room.results[sid] = Result()
        self.notifier.enter(sid, room.channel)
        self.notifier.send('playerJoined', JOINED_TEXT.format(sid=sid), to=room.channel, skip=sid)
        self.notifier.send('receiveHexCode', room.target_color, to=sid)

        slot = len(room.players)
        self.notifier.send('assignPlayerNumber', {'number': slot}, to=sid)
        self.logger.info(f"[join] room={room.room_id} sid={sid} slot={slot}")

        if room.is_full:
            self.notifier.send('gameStart', GAME_START_TEXT, to=room.channel)
            self.logger.info(f"[game-start] room={room.room_id}")
        else:
            self.notifier.send('waitingForPlayer', WAITING_TEXT, to=sid)
        return slot

    # ---- in-game events ----

    def _room_for(self, sid: str, room_id: Optional[str]) -> Optional[Room]:
        if room_id:
            return self.registry.get(room_id)
        return self.registry.find_room_containing(sid)

    def relay_guess(self, sid: str, guess, room_id: Optional[str] = None) -> bool:
        room = self._room_for(sid, room_id)
        if room is None:
            return False
        with room.lock:
            slot = room.slot_of(sid)
            if room.closed or slot is None:
                self.logger.warning(f"[guess-ignored] room={room.room_id} sid={sid} not seated")
                return False
            self.notifier.send('receiveGuess', {'guess': guess, 'player': slot},
                               to=room.channel, skip=sid)
        return True

    def submit_result(self, sid: str, won: bool, elapsed_seconds: int,
                      room_id: Optional[str] = None) -> Optional[MatchReport]:
        """Record a terminal result; resolve the match once both are in.

        Returns a MatchReport when this submission completed the match,
        otherwise None. Submissions for rooms that no longer exist are
        dropped without complaint.
        """
        room = self._room_for(sid, room_id)
        if room is None:
            return None
        with room.lock:
            if room.closed:
                return None
            result = room.results.get(sid)
            slot = room.slot_of(sid)
            if slot is None or result is None:
                self.logger.warning(f"[result-ignored] room={room.room_id} sid={sid} has no seat")
                return None
            if result.submitted:
                self.logger.warning(f"[result-ignored] room={room.room_id} sid={sid} already submitted")
                return None

            result.won = won
            result.elapsed_seconds = elapsed_seconds
            result.submitted = True
            room.finished_count += 1
            self.logger.info(
                f"[result] room={room.room_id} slot={slot} won={won} time={elapsed_seconds}s "
                f"finished={room.finished_count}"
            )
            self.notifier.send('receiveWinLose',
                               {'res': 'win' if won else 'lose', 'time': elapsed_seconds, 'player': slot},
                               to=room.channel, skip=sid)

            if room.finished_count < ROOM_CAPACITY:
                return None
            return self._resolve(room)

    def _resolve(self, room: Room) -> MatchReport:
        player1, player2 = (room.results[p] for p in room.players)
        outcome = resolve_match(player1, player2)
        self.notifier.send('finishGame', outcome.to_dict(), to=room.channel)
        self.logger.info(f"[finish] room={room.room_id} winner={outcome.winner} time={outcome.time}")

        self.registry.remove(room.room_id)
        self.notifier.close(room.channel)
        return MatchReport(
            room_id=room.room_id,
            target_color=room.target_color,
            player1=player1,
            player2=player2,
            outcome=outcome,
        )

    # ---- disconnect ----

    def disconnect(self, sid: str) -> Optional[Room]:
        """Drop sid from whichever room holds it. Returns that room, if any."""
        room = self.registry.find_room_containing(sid)
        if room is None:
            return None
        with room.lock:
            if room.closed or sid not in room.players:
                return None
            before = list(room.players)
            room.players.remove(sid)
            result = room.results.get(sid)
            if result is not None and result.submitted:
                room.finished_count -= 1
            self.logger.info(f"[leave] room={room.room_id} sid={sid} remaining={len(room.players)}")

            if not room.players:
                self.registry.remove(room.room_id)
                self.logger.info(f"[room-closed] room={room.room_id} empty")
                return room

            for position, other in enumerate(room.players, start=1):
                self.notifier.send('playerLeft', PLAYER_LEFT_TEXT, to=other)
                if before.index(other) + 1 != position:
                    self.notifier.send('assignPlayerNumber', {'number': position}, to=other)
        return room
