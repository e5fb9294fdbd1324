from datetime import datetime, timezone

from firstgoal import db


class IneligiblePlayer(db.Model):
    """A player who may not be picked as a darkhorse in a league"""

    __tablename__ = "ineligible_players"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)
    player_name = db.Column(db.String(100), nullable=False)
    note = db.Column(db.String(255))

    added_by = db.Column(db.String(64))
    added_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.UniqueConstraint("league_id", "player_name", name="unique_league_ineligible"),
        db.Index("idx_ineligible_league", "league_id"),
    )

    def __repr__(self):
        return f"<IneligiblePlayer {self.player_name} league_id={self.league_id}>"

    def to_dict(self):
        return {
            "player_name": self.player_name,
            "note": self.note,
            "added_by": self.added_by,
            "added_at": self.added_at.isoformat() if self.added_at else None,
        }
