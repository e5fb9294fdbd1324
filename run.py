from firstgoal import create_app, db
from firstgoal.models import Game, League, LeagueMember, Pick, Result, Season

app = create_app()


@app.shell_context_processor
def make_shell_context():
    return {
        "db": db,
        "League": League,
        "LeagueMember": LeagueMember,
        "Season": Season,
        "Game": Game,
        "Pick": Pick,
        "Result": Result,
    }


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
