from datetime import datetime, timezone

from firstgoal import db


class AdminAction(db.Model):
    __tablename__ = "admin_actions"

    id = db.Column(db.Integer, primary_key=True)

    # Action details
    admin_member_id = db.Column(db.String(64), nullable=False)
    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), nullable=False)

    # 'enter_result', 'correct_result', 'score_game', 'set_roster',
    # 'add_ineligible', 'remove_ineligible'
    action_type = db.Column(db.String(50), nullable=False)
    action_description = db.Column(db.String(500), nullable=False)

    # Related object IDs for context
    game_id = db.Column(db.Integer, db.ForeignKey("games.id"), nullable=True)

    # Additional context data (JSON)
    action_metadata = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        db.Index("idx_admin_action_league", "league_id"),
        db.Index("idx_admin_action_type", "action_type"),
        db.Index("idx_admin_action_created", "created_at"),
    )

    def __repr__(self):
        return f"<AdminAction {self.action_type} by {self.admin_member_id} in league {self.league_id}>"

    @staticmethod
    def log_action(
        admin_member_id,
        league_id,
        action_type,
        description,
        game_id=None,
        action_metadata=None,
    ):
        """Log an admin action"""
        action = AdminAction(
            admin_member_id=admin_member_id,
            league_id=league_id,
            action_type=action_type,
            action_description=description,
            game_id=game_id,
            action_metadata=action_metadata or {},
        )

        db.session.add(action)
        return action

    @staticmethod
    def log_result_entry(admin_member_id, game, result, corrected=False):
        """Convenience method for logging result entry or correction"""
        if result.is_shutout:
            outcome = "shutout"
        else:
            outcome = f"first goal {result.first_scorer} ({result.first_play_type})"
            if result.second_scorer:
                outcome += f", second goal {result.second_scorer} ({result.second_play_type})"

        verb = "Corrected" if corrected else "Entered"
        return AdminAction.log_action(
            admin_member_id=admin_member_id,
            league_id=game.league_id,
            action_type="correct_result" if corrected else "enter_result",
            description=f"{verb} result vs {game.opponent}: {outcome}",
            game_id=game.id,
            action_metadata=result.to_dict(),
        )

    @staticmethod
    def log_scoring_run(admin_member_id, game, scored_count, points_awarded):
        """Convenience method for logging a scoring run"""
        return AdminAction.log_action(
            admin_member_id=admin_member_id,
            league_id=game.league_id,
            action_type="score_game",
            description=f"Scored {scored_count} picks vs {game.opponent}",
            game_id=game.id,
            action_metadata={
                "scored_count": scored_count,
                "points_awarded": points_awarded,
            },
        )

    def to_dict(self):
        return {
            "id": self.id,
            "admin_member_id": self.admin_member_id,
            "league_id": self.league_id,
            "action_type": self.action_type,
            "description": self.action_description,
            "game_id": self.game_id,
            "metadata": self.action_metadata or {},
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
