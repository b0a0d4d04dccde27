"""Versus-mode room services: registry, match resolution and coordination.

This package holds the room state machine and the win/lose rules. It knows
nothing about Socket.IO or Flask; socket handlers hand it a notifier and
translate events into coordinator calls.
"""

from .coordinator import MatchCoordinator, MatchReport
from .registry import ROOM_CAPACITY, Result, Room, RoomRegistry
from .resolution import Outcome, resolve_match

__all__ = [
    'MatchCoordinator',
    'MatchReport',
    'ROOM_CAPACITY',
    'Result',
    'Room',
    'RoomRegistry',
    'Outcome',
    'resolve_match',
]
