from datetime import datetime, timezone

from hexdle import db


def _utcnow():
    return datetime.now(timezone.utc)


class MatchRecord(db.Model):
    """A resolved versus match. Rooms themselves are never stored."""
    __tablename__ = 'match_record'
    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.String(128), nullable=False, index=True)
    target_color = db.Column(db.String(6), nullable=False)
    player1_won = db.Column(db.Boolean, nullable=False, default=False)
    player1_time = db.Column(db.Integer, nullable=False, default=0)
    player2_won = db.Column(db.Boolean, nullable=False, default=False)
    player2_time = db.Column(db.Integer, nullable=False, default=0)
    winner = db.Column(db.Integer, nullable=True)  # slot number; NULL means draw
    message = db.Column(db.String(128), nullable=False)
    finished_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    @property
    def is_draw(self):
        return self.winner is None

    def to_dict(self):
        return {
            'id': self.id,
            'room': self.room_id,
            'target_color': self.target_color,
            'players': [
                {'number': 1, 'won': self.player1_won, 'time': self.player1_time},
                {'number': 2, 'won': self.player2_won, 'time': self.player2_time},
            ],
            'winner': self.winner,
            'draw': self.is_draw,
            'message': self.message,
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
        }
