from firstgoal import db


class LeaguePlayer(db.Model):
    """A player on the roster members pick from"""

    __tablename__ = "league_players"

    league_id = db.Column(db.Integer, db.ForeignKey("leagues.id"), primary_key=True)
    player_name = db.Column(db.String(100), primary_key=True)

    def __repr__(self):
        return f"<LeaguePlayer {self.player_name} league_id={self.league_id}>"
