from datetime import datetime, timezone

from firstgoal import db
from firstgoal.scoring import GameResult


def _code(play_type):
    return getattr(play_type, "value", play_type)


class Result(db.Model):
    __tablename__ = "results"

    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(
        db.Integer, db.ForeignKey("games.id"), nullable=False, unique=True
    )

    is_shutout = db.Column(db.Boolean, nullable=False, default=False)
    first_scorer = db.Column(db.String(100))
    first_play_type = db.Column(db.String(2))
    second_scorer = db.Column(db.String(100))
    second_play_type = db.Column(db.String(2))

    entered_by = db.Column(db.String(64))
    entered_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime)

    __table_args__ = (
        db.CheckConstraint(
            "first_play_type IS NULL OR first_play_type IN ('es', 'pp', 'pk')",
            name="valid_first_play_type",
        ),
        db.CheckConstraint(
            "second_play_type IS NULL OR second_play_type IN ('es', 'pp', 'pk')",
            name="valid_second_play_type",
        ),
    )

    def __repr__(self):
        if self.is_shutout:
            return f"<Result game_id={self.game_id} shutout>"
        return f"<Result game_id={self.game_id} first={self.first_scorer}>"

    def to_game_result(self):
        """Immutable snapshot handed to the scoring engine"""
        return GameResult(
            is_shutout=bool(self.is_shutout),
            first_scorer=self.first_scorer,
            first_play_type=self.first_play_type,
            second_scorer=self.second_scorer,
            second_play_type=self.second_play_type,
        )

    def update_from(self, game_result, entered_by=None):
        """Record (or correct) the outcome; a shutout clears the scorer fields"""
        if game_result.is_shutout:
            self.is_shutout = True
            self.first_scorer = None
            self.first_play_type = None
            self.second_scorer = None
            self.second_play_type = None
        else:
            self.is_shutout = False
            self.first_scorer = game_result.first_scorer
            self.first_play_type = _code(game_result.first_play_type)
            self.second_scorer = game_result.second_scorer or None
            self.second_play_type = (
                _code(game_result.second_play_type)
                if game_result.second_scorer
                else None
            )

        if self.id is not None:
            self.updated_at = datetime.now(timezone.utc)
        if entered_by:
            self.entered_by = entered_by

    def to_dict(self):
        return {
            "game_id": self.game_id,
            "is_shutout": self.is_shutout,
            "first_scorer": self.first_scorer,
            "first_play_type": self.first_play_type,
            "second_scorer": self.second_scorer,
            "second_play_type": self.second_play_type,
            "entered_by": self.entered_by,
            "entered_at": self.entered_at.isoformat() if self.entered_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
