from datetime import datetime, timezone

from firstgoal import db
from firstgoal.scoring import EventWindow

STATUSES = ("upcoming", "locked", "completed")


class Game(db.Model):
    __tablename__ = "games"

    id = db.Column(db.Integer, primary_key=True)

    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)
    season_id = db.Column(db.Integer, db.ForeignKey("seasons.id"), nullable=False)

    opponent = db.Column(db.String(100), nullable=False)
    home_away = db.Column(db.String(4), nullable=False, default="home")

    # Game timing; picks close at the deadline
    puck_drop = db.Column(db.DateTime, nullable=False)
    deadline = db.Column(db.DateTime, nullable=False)

    status = db.Column(db.String(10), nullable=False, default="upcoming")

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    league = db.relationship("League")
    picks = db.relationship(
        "Pick", backref="game", lazy="dynamic", cascade="all, delete-orphan"
    )
    result = db.relationship(
        "Result", backref="game", uselist=False, cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.Index("idx_game_league_season", "league_id", "season_id", "puck_drop"),
        db.CheckConstraint("home_away IN ('home', 'away')", name="valid_home_away"),
        db.CheckConstraint(
            "status IN ('upcoming', 'locked', 'completed')", name="valid_game_status"
        ),
    )

    def __repr__(self):
        return f"<Game vs {self.opponent} {self.puck_drop}>"

    def deadline_utc(self):
        # If deadline is timezone-naive, assume it's UTC
        from firstgoal.utils.timezone_utils import ensure_utc

        return ensure_utc(self.deadline)

    def is_locked(self, now=None):
        """Check if the pick window has closed"""
        now = now or datetime.now(timezone.utc)
        return self.status != "upcoming" or now >= self.deadline_utc()

    @property
    def effective_status(self):
        if self.status == "upcoming" and self.is_locked():
            return "locked"
        return self.status

    def event_window(self):
        """Snapshot of what pick validation needs to know about this game"""
        return EventWindow(
            deadline=self.deadline_utc(),
            ineligible_darkhorses=self.league.get_ineligible_names(),
        )

    def mark_completed(self):
        self.status = "completed"

    def to_dict(self, include_result=False):
        from firstgoal.utils.timezone_utils import format_deadline

        data = {
            "id": self.id,
            "league_id": self.league_id,
            "season_id": self.season_id,
            "opponent": self.opponent,
            "home_away": self.home_away,
            "puck_drop": self.puck_drop.isoformat() if self.puck_drop else None,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "deadline_display": format_deadline(self.deadline),
            "status": self.effective_status,
            "pick_count": self.picks.count(),
        }

        if include_result:
            data["result"] = self.result.to_dict() if self.result else None

        return data
