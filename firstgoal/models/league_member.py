from datetime import datetime, timezone

from firstgoal import db

ROLES = ("admin", "member")


class LeagueMember(db.Model):
    __tablename__ = "league_members"

    id = db.Column(db.Integer, primary_key=True)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)

    # Opaque identifier issued by the identity provider
    member_id = db.Column(db.String(64), nullable=False)
    display_name = db.Column(db.String(100), nullable=False)

    role = db.Column(db.String(10), nullable=False, default="member")

    joined_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.UniqueConstraint("league_id", "member_id", name="unique_league_member"),
        db.CheckConstraint("role IN ('admin', 'member')", name="valid_member_role"),
        db.Index("idx_league_members_member", "member_id"),
    )

    def __repr__(self):
        return f"<LeagueMember member_id={self.member_id} league_id={self.league_id}>"

    @property
    def is_admin(self):
        return self.role == "admin"

    def promote_to_admin(self):
        self.role = "admin"

    def demote_from_admin(self):
        self.role = "member"

    def to_dict(self):
        return {
            "member_id": self.member_id,
            "league_id": self.league_id,
            "display_name": self.display_name,
            "role": self.role,
            "joined_at": self.joined_at.isoformat() if self.joined_at else None,
        }
