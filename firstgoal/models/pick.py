from datetime import datetime, timezone

from firstgoal import db
from firstgoal.scoring import PickEntry, ScoreBreakdown, ScoredPick

PLAY_TYPES = ("es", "pp", "pk")


class Pick(db.Model):
    __tablename__ = "picks"

    id = db.Column(db.Integer, primary_key=True)

    # Pick identification
    member_id = db.Column(db.String(64), nullable=False)
    game_id = db.Column(db.Integer, db.ForeignKey("games.id"), nullable=False)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)
    season_id = db.Column(db.Integer, db.ForeignKey("seasons.id"), nullable=False)

    # Pick details
    regular = db.Column(db.String(100), nullable=False)
    darkhorse = db.Column(db.String(100))
    is_shutout = db.Column(db.Boolean, nullable=False, default=False)
    play_type = db.Column(db.String(2), nullable=False, default="es")
    dh_play_type = db.Column(db.String(2), nullable=False, default="es")

    # Results (calculated after the result is entered)
    pts = db.Column(db.SmallInteger)
    breakdown = db.Column(db.JSON, default=dict)
    scored = db.Column(db.Boolean, nullable=False, default=False)

    # Timestamps
    submitted_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        db.UniqueConstraint("member_id", "game_id", name="unique_member_game_pick"),
        db.CheckConstraint("play_type IN ('es', 'pp', 'pk')", name="valid_play_type"),
        db.CheckConstraint(
            "dh_play_type IN ('es', 'pp', 'pk')", name="valid_dh_play_type"
        ),
        db.Index("idx_pick_game", "game_id"),
        db.Index("idx_pick_member_league", "member_id", "league_id"),
        db.Index("idx_pick_season", "season_id"),
    )

    def __repr__(self):
        return f"<Pick member_id={self.member_id} game_id={self.game_id} regular={self.regular}>"

    def to_entry(self):
        """Immutable snapshot handed to the scoring engine"""
        return PickEntry(
            regular_scorer=self.regular,
            darkhorse_scorer=self.darkhorse or None,
            is_shutout_call=bool(self.is_shutout),
            play_type=self.play_type,
            darkhorse_play_type=self.dh_play_type,
        )

    def get_breakdown(self):
        """Parsed breakdown, or None while the pick is unscored"""
        if not self.scored:
            return None
        return ScoreBreakdown.from_dict(self.breakdown)

    def to_scored_pick(self):
        return ScoredPick(
            member_id=self.member_id,
            season_id=self.season_id,
            breakdown=self.get_breakdown(),
        )

    def apply_score(self, breakdown):
        """Overwrite any previous score with a freshly computed breakdown"""
        self.pts = breakdown.total
        self.breakdown = breakdown.to_dict()
        self.scored = True

    def clear_score(self):
        self.pts = None
        self.breakdown = {}
        self.scored = False

    def update_from(self, entry):
        """Copy the editable fields of a PickEntry onto this pick"""
        self.regular = entry.regular_scorer
        self.darkhorse = entry.darkhorse_scorer
        self.is_shutout = entry.is_shutout_call
        self.play_type = str(getattr(entry.play_type, "value", entry.play_type))
        self.dh_play_type = str(
            getattr(entry.darkhorse_play_type, "value", entry.darkhorse_play_type)
        )

    @staticmethod
    def get_for_member(member_id, game_id):
        return Pick.query.filter_by(member_id=member_id, game_id=game_id).first()

    def to_dict(self):
        """Convert pick to dictionary for API responses"""
        return {
            "id": self.id,
            "member_id": self.member_id,
            "game_id": self.game_id,
            "league_id": self.league_id,
            "season_id": self.season_id,
            "regular": self.regular,
            "darkhorse": self.darkhorse,
            "is_shutout": self.is_shutout,
            "play_type": self.play_type,
            "dh_play_type": self.dh_play_type,
            "pts": self.pts,
            "breakdown": self.breakdown or {},
            "scored": self.scored,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
        }
