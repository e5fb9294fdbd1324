from datetime import datetime, timezone

from firstgoal import db


class League(db.Model):
    __tablename__ = "leagues"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)

    # The club whose games this league predicts
    team_id = db.Column(db.String(20), nullable=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    members = db.relationship(
        "LeagueMember", backref="league", lazy="dynamic", cascade="all, delete-orphan"
    )
    seasons = db.relationship(
        "Season",
        backref="league",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )
    players = db.relationship(
        "LeaguePlayer", backref="league", lazy="dynamic", cascade="all, delete-orphan"
    )
    ineligible_players = db.relationship(
        "IneligiblePlayer",
        backref="league",
        lazy="dynamic",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<League {self.name}>"

    @property
    def current_season(self):
        """The league's active season, if any"""
        from .season import Season

        return (
            self.seasons.filter(Season.status == "active")
            .order_by(Season.start_date.desc())
            .first()
        )

    def get_member(self, member_id):
        from .league_member import LeagueMember

        return LeagueMember.query.filter_by(
            league_id=self.id, member_id=member_id
        ).first()

    def add_member(self, member_id, display_name=None, role="member"):
        """Add a member, or update the role of an existing one"""
        from .league_member import LeagueMember

        membership = self.get_member(member_id)
        if membership:
            membership.role = role
            if display_name:
                membership.display_name = display_name
            return membership

        membership = LeagueMember(
            league_id=self.id,
            member_id=member_id,
            display_name=display_name or member_id,
            role=role,
        )
        db.session.add(membership)
        return membership

    def get_ineligible_names(self):
        """Names that may not be picked as a darkhorse in this league"""
        return frozenset(player.player_name for player in self.ineligible_players)

    def get_roster(self):
        return sorted(player.player_name for player in self.players)

    def to_dict(self):
        current_season = self.current_season
        return {
            "id": self.id,
            "name": self.name,
            "team_id": self.team_id,
            "current_season_id": current_season.id if current_season else None,
            "member_count": self.members.count(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
