from functools import wraps

from flask import abort, current_app, g, jsonify, request

from firstgoal import db, limiter
from firstgoal.models import Game, IneligiblePlayer, League, Pick, Season
from firstgoal.routes.api import bp
from firstgoal.scoring import GameResult, PickEntry
from firstgoal.services import (
    LeagueAuthorizer,
    add_ineligible_player,
    enter_result,
    get_season_standings,
    is_eligible_as_darkhorse,
    remove_ineligible_player,
    score_game,
    set_league_players,
    submit_pick,
)


def identified(f):
    """Require the caller identity header and expose an authorizer as g.authorizer"""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        authorizer = LeagueAuthorizer.from_request()
        if authorizer.caller_id is None:
            abort(401)
        g.authorizer = authorizer
        return f(*args, **kwargs)

    return decorated_function


def no_store(f):
    """Mark responses as uncacheable by clients and proxies"""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        response = f(*args, **kwargs)
        if hasattr(response, "headers"):
            response.headers["Cache-Control"] = (
                "no-store, no-cache, must-revalidate, max-age=0"
            )
        return response

    return decorated_function


def get_json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, description="Expected a JSON object")
    return data


def _optional_text(data, key):
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        abort(400, description=f"'{key}' must be a string")
    return value.strip() or None


def get_or_404(model, ident):
    obj = db.session.get(model, ident)
    if obj is None:
        abort(404)
    return obj


@bp.route("/leagues/<int:league_id>")
@identified
def league_detail(league_id):
    league = get_or_404(League, league_id)
    g.authorizer.require_member(league.id)
    return jsonify(league.to_dict())


@bp.route("/leagues/<int:league_id>/players")
@identified
def league_players(league_id):
    league = get_or_404(League, league_id)
    g.authorizer.require_member(league.id)

    ineligible = league.get_ineligible_names()
    return jsonify(
        [
            {"player_name": name, "darkhorse_eligible": name not in ineligible}
            for name in league.get_roster()
        ]
    )


@bp.route("/leagues/<int:league_id>/players", methods=["PUT"])
@identified
def replace_league_players(league_id):
    league = get_or_404(League, league_id)
    data = get_json_body()
    players = data.get("players")
    if not isinstance(players, list) or not all(isinstance(p, str) for p in players):
        abort(400, description="'players' must be a list of names")

    names = set_league_players(league, players, g.authorizer)
    return jsonify({"success": True, "players": names})


@bp.route("/leagues/<int:league_id>/players/<path:player_name>/eligibility")
@identified
def player_eligibility(league_id, player_name):
    league = get_or_404(League, league_id)
    g.authorizer.require_member(league.id)
    return jsonify(
        {
            "player_name": player_name,
            "darkhorse_eligible": is_eligible_as_darkhorse(league.id, player_name),
        }
    )


@bp.route("/leagues/<int:league_id>/ineligible")
@identified
def ineligible_players(league_id):
    league = get_or_404(League, league_id)
    g.authorizer.require_member(league.id)
    entries = league.ineligible_players.order_by(IneligiblePlayer.player_name).all()
    return jsonify([entry.to_dict() for entry in entries])


@bp.route("/leagues/<int:league_id>/ineligible", methods=["POST"])
@identified
def add_ineligible(league_id):
    league = get_or_404(League, league_id)
    data = get_json_body()
    player_name = _optional_text(data, "player_name")
    if not player_name:
        abort(400, description="'player_name' is required")

    entry = add_ineligible_player(
        league, player_name, g.authorizer, note=_optional_text(data, "note")
    )
    return jsonify(entry.to_dict()), 201


@bp.route(
    "/leagues/<int:league_id>/ineligible/<path:player_name>", methods=["DELETE"]
)
@identified
def remove_ineligible(league_id, player_name):
    league = get_or_404(League, league_id)
    if not remove_ineligible_player(league, player_name, g.authorizer):
        abort(404)
    return jsonify({"success": True})


@bp.route("/games/<int:game_id>")
@identified
def game_detail(game_id):
    game = get_or_404(Game, game_id)
    g.authorizer.require_member(game.league_id)
    return jsonify(game.to_dict(include_result=True))


@bp.route("/games/<int:game_id>/picks")
@identified
@no_store
def game_picks(game_id):
    game = get_or_404(Game, game_id)
    g.authorizer.require_member(game.league_id)

    # Other members' picks stay hidden until the window closes
    query = game.picks.order_by(Pick.submitted_at)
    if not game.is_locked():
        query = query.filter(Pick.member_id == g.authorizer.caller_id)

    return jsonify([pick.to_dict() for pick in query.all()])


@bp.route("/games/<int:game_id>/pick", methods=["PUT"])
@limiter.limit(lambda: current_app.config.get("PICK_RATE_LIMIT", "30 per minute"))
@identified
def put_pick(game_id):
    game = get_or_404(Game, game_id)
    data = get_json_body()

    entry = PickEntry(
        regular_scorer=_optional_text(data, "regular"),
        darkhorse_scorer=_optional_text(data, "darkhorse"),
        is_shutout_call=bool(data.get("is_shutout", False)),
        play_type=data.get("play_type", "es"),
        darkhorse_play_type=data.get("dh_play_type", "es"),
    )

    pick, created = submit_pick(game, entry, g.authorizer)
    return jsonify(pick.to_dict()), 201 if created else 200


@bp.route("/games/<int:game_id>/result", methods=["PUT"])
@identified
def put_result(game_id):
    game = get_or_404(Game, game_id)
    data = get_json_body()

    game_result = GameResult(
        is_shutout=bool(data.get("is_shutout", False)),
        first_scorer=_optional_text(data, "first_scorer"),
        first_play_type=data.get("first_play_type"),
        second_scorer=_optional_text(data, "second_scorer"),
        second_play_type=data.get("second_play_type"),
    )

    score_now = request.args.get("score", "0").lower() in ("1", "true", "yes")
    result, run = enter_result(game, game_result, g.authorizer, score_now=score_now)

    body = {"result": result.to_dict(), "scoring": run._asdict() if run else None}
    return jsonify(body)


@bp.route("/games/<int:game_id>/score", methods=["POST"])
@identified
def post_score(game_id):
    game = get_or_404(Game, game_id)
    run = score_game(game, g.authorizer)
    return jsonify(run._asdict())


@bp.route("/seasons/<int:season_id>/standings")
@identified
def season_standings(season_id):
    season = get_or_404(Season, season_id)
    g.authorizer.require_member(season.league_id)
    return jsonify(
        {
            "season": season.to_dict(),
            "standings": get_season_standings(season.id),
        }
    )
