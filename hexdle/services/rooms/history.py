from typing import List

from sqlalchemy.exc import SQLAlchemyError

from hexdle import db
from hexdle.models import MatchRecord
from .coordinator import MatchReport


def record_match(report: MatchReport, logger=None) -> bool:
    """Store a resolved match. Returns False if the write failed.

    A failed write is logged and rolled back; the match outcome has
    already been broadcast by then and is not affected.
    """
    record = MatchRecord(
        room_id=report.room_id,
        target_color=report.target_color,
        player1_won=report.player1.won,
        player1_time=report.player1.elapsed_seconds,
        player2_won=report.player2.won,
        player2_time=report.player2.elapsed_seconds,
        winner=report.outcome.winner,
        message=report.outcome.message,
    )
    try:
        db.session.add(record)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        if logger is not None:
            logger.error(f"[history-error] room={report.room_id} {exc}")
        return False
    return True


def recent_matches(limit: int = 20) -> List[MatchRecord]:
    return (
        MatchRecord.query
        .order_by(MatchRecord.finished_at.desc(), MatchRecord.id.desc())
        .limit(limit)
        .all()
    )
