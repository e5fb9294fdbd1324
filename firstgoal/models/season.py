from datetime import datetime, timezone

from firstgoal import db


class Season(db.Model):
    __tablename__ = "seasons"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)
    name = db.Column(db.String(50), nullable=False)  # e.g., "2025-26"

    status = db.Column(db.String(10), nullable=False, default="active")

    start_date = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    end_date = db.Column(db.DateTime)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    games = db.relationship(
        "Game", backref="season", lazy="dynamic", cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('active', 'archived')", name="valid_season_status"
        ),
        db.Index("idx_season_league_status", "league_id", "status"),
    )

    def __repr__(self):
        return f"<Season {self.name}>"

    @staticmethod
    def create_season(league, name, start_date=None, end_date=None):
        """Create a new season for a league"""
        season = Season(
            league_id=league.id,
            name=name,
            start_date=start_date or datetime.now(timezone.utc),
            end_date=end_date,
        )
        db.session.add(season)
        return season

    def activate(self):
        """Activate this season (archives the league's other seasons)"""
        Season.query.filter(
            Season.league_id == self.league_id, Season.id != self.id
        ).update({"status": "archived"})
        self.status = "active"

    def to_dict(self):
        return {
            "id": self.id,
            "league_id": self.league_id,
            "name": self.name,
            "status": self.status,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "game_count": self.games.count(),
        }
