from dataclasses import dataclass
from typing import Optional

from .registry import Result

DRAW_MESSAGE = "Neither player guessed correctly. It's a draw!"


@dataclass(frozen=True)
class Outcome:
    winner: Optional[int]  # slot number, None on a draw
    time: Optional[int]
    both_won: bool = False

    @property
    def draw(self) -> bool:
        return self.winner is None

    @property
    def message(self) -> str:
        if self.draw:
            return DRAW_MESSAGE
        if self.both_won:
            return f"Player {self.winner} wins with a time of {self.time} seconds!"
        return f"Player {self.winner} is the winner with a time of {self.time} seconds!"

    def to_dict(self) -> dict:
        return {
            'message': self.message,
            'winner': self.winner,
            'time': self.time,
            'draw': self.draw,
        }


def resolve_match(first: Result, second: Result) -> Outcome:
    """Decide a match from the results of Player 1 and Player 2.

    A correct guess always beats an incorrect one. When both players
    guessed the color the faster one wins, and an exact tie goes to
    Player 1. When neither guessed it the match is a draw.
    """
    if first.won and second.won:
        if second.elapsed_seconds < first.elapsed_seconds:
            return Outcome(winner=2, time=second.elapsed_seconds, both_won=True)
        return Outcome(winner=1, time=first.elapsed_seconds, both_won=True)
    if first.won:
        return Outcome(winner=1, time=first.elapsed_seconds)
    if second.won:
        return Outcome(winner=2, time=second.elapsed_seconds)
    return Outcome(winner=None, time=None)
