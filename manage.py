#!/usr/bin/env python3
"""
First Goal Management CLI

Command-line management for leagues, seasons, games, results and scoring.
Commands run as the system operator and pass every admin check.
"""

import logging
import os

import click
from flask.cli import with_appcontext
from flask_migrate import downgrade, migrate, upgrade
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from firstgoal import create_app, db
from firstgoal.models import Game, League, Pick, Result, Season
from firstgoal.scoring import GameResult, InvalidResult
from firstgoal.services import (
    LeagueAuthorizer,
    PicksStillOpen,
    enter_result,
    get_season_standings,
    rescore_season,
    score_game,
)
from firstgoal.utils.timezone_utils import convert_to_utc

app = create_app()

PLAY_TYPE_CHOICE = click.Choice(["es", "pp", "pk"])


def _get_league(league_id):
    league = db.session.get(League, league_id)
    if not league:
        raise click.ClickException(f"League {league_id} not found!")
    return league


def _get_season(season_id):
    season = db.session.get(Season, season_id)
    if not season:
        raise click.ClickException(f"Season {season_id} not found!")
    return season


def _get_game(game_id):
    game = db.session.get(Game, game_id)
    if not game:
        raise click.ClickException(f"Game {game_id} not found!")
    return game


@click.group()
def cli():
    """First Goal Management CLI"""
    pass


# League Management Commands
@cli.group()
def league():
    """League management commands"""
    pass


@league.command("create")
@click.argument("name")
@click.argument("team_id")
@with_appcontext
def create_league(name, team_id):
    """Create a new league for a team"""
    try:
        new_league = League(name=name, team_id=team_id)
        db.session.add(new_league)
        db.session.commit()
        click.echo(f"Created league {new_league.id}: {name} ({team_id})")
    except SQLAlchemyError as e:
        db.session.rollback()
        click.echo(f"Database error creating league: {str(e)}")
        logging.error(f"League creation failed - SQL error: {e}")


@league.command("add-member")
@click.argument("league_id", type=int)
@click.argument("member_id")
@click.option("--name", "display_name", help="Display name")
@click.option("--admin", is_flag=True, help="Grant league admin role")
@with_appcontext
def add_member(league_id, member_id, display_name, admin):
    """Add a member to a league (or change their role)"""
    target = _get_league(league_id)
    try:
        membership = target.add_member(
            member_id, display_name=display_name, role="admin" if admin else "member"
        )
        db.session.commit()
        click.echo(f"{membership.display_name} is now {membership.role} of {target.name}")
    except SQLAlchemyError as e:
        db.session.rollback()
        click.echo(f"Database error adding member: {str(e)}")
        logging.error(f"Adding member failed - SQL error: {e}")


# Season Management Commands
@cli.group()
def season():
    """Season management commands"""
    pass


@season.command("create")
@click.argument("league_id", type=int)
@click.argument("name")
@click.option("--activate", is_flag=True, help="Activate this season")
@with_appcontext
def create_season(league_id, name, activate):
    """Create a new season"""
    target = _get_league(league_id)
    try:
        new_season = Season.create_season(target, name)
        db.session.flush()
        if activate:
            new_season.activate()
        db.session.commit()
        click.echo(f"Created season {new_season.id}: {name}")
        if activate:
            click.echo(f"Activated season {name}")
    except IntegrityError as e:
        db.session.rollback()
        click.echo(f"Season {name} could not be created: {e.orig}")
        logging.error(f"Season creation failed - integrity error: {e}")
    except SQLAlchemyError as e:
        db.session.rollback()
        click.echo(f"Database error creating season: {str(e)}")
        logging.error(f"Season creation failed - SQL error: {e}")


@season.command("activate")
@click.argument("season_id", type=int)
@with_appcontext
def activate_season(season_id):
    """Activate a season (archives the league's others)"""
    target = _get_season(season_id)
    try:
        target.activate()
        db.session.commit()
        click.echo(f"Activated season {target.name}")
    except SQLAlchemyError as e:
        db.session.rollback()
        click.echo(f"Database error activating season: {str(e)}")
        logging.error(f"Season activation failed - SQL error: {e}")


@season.command("list")
@click.argument("league_id", type=int)
@with_appcontext
def list_seasons(league_id):
    """List the seasons of a league"""
    seasons = (
        Season.query.filter_by(league_id=league_id)
        .order_by(Season.start_date.desc())
        .all()
    )
    if not seasons:
        click.echo("No seasons found.")
        return

    click.echo("Seasons:")
    for s in seasons:
        click.echo(f"  {s.id}: {s.name} [{s.status}] - {s.games.count()} games")


# Game Commands
@cli.group()
def game():
    """Game schedule commands"""
    pass


@game.command("add")
@click.argument("season_id", type=int)
@click.argument("opponent")
@click.argument("puck_drop", type=click.DateTime(formats=["%Y-%m-%d %H:%M"]))
@click.option("--away", is_flag=True, help="Away game")
@click.option(
    "--deadline",
    type=click.DateTime(formats=["%Y-%m-%d %H:%M"]),
    help="Pick deadline (defaults to puck drop)",
)
@with_appcontext
def add_game(season_id, opponent, puck_drop, away, deadline):
    """Schedule a game; times are in the application timezone"""
    target = _get_season(season_id)
    try:
        puck_drop = convert_to_utc(puck_drop)
        new_game = Game(
            league_id=target.league_id,
            season_id=target.id,
            opponent=opponent,
            home_away="away" if away else "home",
            puck_drop=puck_drop,
            deadline=convert_to_utc(deadline) if deadline else puck_drop,
        )
        db.session.add(new_game)
        db.session.commit()
        click.echo(f"Added game {new_game.id} vs {opponent}")
    except SQLAlchemyError as e:
        db.session.rollback()
        click.echo(f"Database error adding game: {str(e)}")
        logging.error(f"Adding game failed - SQL error: {e}")


@game.command("list")
@click.argument("season_id", type=int)
@with_appcontext
def list_games(season_id):
    """List the games of a season"""
    games = Game.query.filter_by(season_id=season_id).order_by(Game.puck_drop).all()
    if not games:
        click.echo("No games found.")
        return

    for g in games:
        click.echo(
            f"  {g.id}: {g.home_away} vs {g.opponent} {g.puck_drop:%Y-%m-%d %H:%M} "
            f"[{g.effective_status}] {g.picks.count()} picks"
        )


# Result and Scoring Commands
@cli.group()
def result():
    """Result entry commands"""
    pass


@result.command("enter")
@click.argument("game_id", type=int)
@click.option("--shutout", is_flag=True, help="No goals were scored")
@click.option("--first", "first_scorer", help="First goal scorer")
@click.option("--first-type", type=PLAY_TYPE_CHOICE, help="First goal play type")
@click.option("--second", "second_scorer", help="Second goal scorer")
@click.option("--second-type", type=PLAY_TYPE_CHOICE, help="Second goal play type")
@click.option("--score", "score_now", is_flag=True, help="Score picks immediately")
@with_appcontext
def enter(game_id, shutout, first_scorer, first_type, second_scorer, second_type, score_now):
    """Enter or correct the result of a game"""
    target = _get_game(game_id)
    game_result = GameResult(
        is_shutout=shutout,
        first_scorer=first_scorer,
        first_play_type=first_type,
        second_scorer=second_scorer,
        second_play_type=second_type,
    )
    try:
        _, run = enter_result(
            target, game_result, LeagueAuthorizer.for_system(), score_now=score_now
        )
    except (InvalidResult, PicksStillOpen) as e:
        raise click.ClickException(str(e))

    click.echo(f"Result saved for game {game_id}")
    if run:
        click.echo(f"Scored {run.scored_count} picks ({run.points_awarded} points)")


@cli.group()
def score():
    """Scoring commands"""
    pass


@score.command("game")
@click.argument("game_id", type=int)
@with_appcontext
def score_one_game(game_id):
    """Score all picks of a game"""
    target = _get_game(game_id)
    try:
        run = score_game(target, LeagueAuthorizer.for_system())
    except (InvalidResult, PicksStillOpen) as e:
        raise click.ClickException(str(e))
    click.echo(f"Scored {run.scored_count} picks ({run.points_awarded} points)")


@score.command("rescore-season")
@click.argument("season_id", type=int)
@with_appcontext
def rescore(season_id):
    """Re-score every completed game of a season"""
    target = _get_season(season_id)
    try:
        runs = rescore_season(target, LeagueAuthorizer.for_system())
    except (InvalidResult, PicksStillOpen) as e:
        raise click.ClickException(str(e))

    for run in runs:
        click.echo(f"  Game {run.game_id}: {run.scored_count} picks, {run.points_awarded} points")
    click.echo(f"Re-scored {len(runs)} games")


@cli.command("standings")
@click.argument("season_id", type=int)
@with_appcontext
def show_standings(season_id):
    """Print the standings table of a season"""
    target = _get_season(season_id)
    rows = get_season_standings(target.id)
    if not rows:
        click.echo("No picks yet.")
        return

    click.echo(f"{'#':>3} {'Member':<24} {'Pts':>4} {'SO':>3} {'DH':>3} {'GP':>3}")
    for row in rows:
        click.echo(
            f"{row['rank']:>3} {row['display_name']:<24} {row['total_points']:>4} "
            f"{row['shutouts_correct']:>3} {row['darkhorse_correct']:>3} "
            f"{row['games_participated']:>3}"
        )


# Database Commands
@cli.group()
def db_cmd():
    """Database commands"""
    pass


@db_cmd.command()
@with_appcontext
def init_db():
    """Initialize database tables"""
    try:
        db.create_all()
        click.echo("Database tables created successfully!")
    except SQLAlchemyError as e:
        click.echo(f"Error initializing database: {str(e)}")


@db_cmd.command()
@with_appcontext
def reset():
    """DANGER: Drop and recreate all tables"""
    if not click.confirm("This will DELETE ALL DATA. Are you sure?"):
        click.echo("Cancelled.")
        return

    try:
        db.drop_all()
        db.create_all()
        click.echo("Database reset successfully!")
    except SQLAlchemyError as e:
        click.echo(f"Error resetting database: {str(e)}")


# Database Migration Commands
@cli.group()
def db_migrate():
    """Database migration commands"""
    pass


@db_migrate.command()
@with_appcontext
def init_migrations():
    """Initialize migrations repository"""
    if os.path.exists("migrations"):
        click.echo("Migrations directory already exists!")
        return

    from flask_migrate import init as flask_migrate_init

    flask_migrate_init()
    click.echo("Migrations repository initialized!")


@db_migrate.command()
@click.option("-m", "--message", required=True, help="Migration message")
@with_appcontext
def create_migration(message):
    """Create a new migration"""
    migrate(message=message)
    click.echo(f"Migration created: {message}")


@db_migrate.command()
@click.option("--revision", default="head", help="Revision to upgrade to")
@with_appcontext
def apply_migrations(revision):
    """Apply migrations to database"""
    upgrade(revision=revision)
    click.echo(f"Migrations applied to {revision}")


@db_migrate.command()
@click.option("--revision", required=True, help="Revision to downgrade to")
@with_appcontext
def rollback_migration(revision):
    """Rollback migrations to specific revision"""
    downgrade(revision=revision)
    click.echo(f"Rolled back to {revision}")


@cli.command()
@with_appcontext
def status():
    """Show application status"""
    click.echo("First Goal Application Status")
    click.echo("=" * 40)

    try:
        db.session.execute(text("SELECT 1"))
        click.echo("Database: Connected")
    except SQLAlchemyError as e:
        click.echo(f"Database: Error - {str(e)}")
        return

    click.echo(f"Leagues: {League.query.count()}")
    click.echo(f"Active seasons: {Season.query.filter_by(status='active').count()}")

    game_count = Game.query.count()
    completed = Game.query.filter_by(status="completed").count()
    click.echo(f"Games: {completed}/{game_count} completed")
    click.echo(f"Results entered: {Result.query.count()}")

    unscored = (
        Pick.query.join(Game)
        .filter(Game.status == "completed", Pick.scored.is_(False))
        .count()
    )
    if unscored:
        click.echo(f"WARNING: {unscored} picks on completed games are unscored")
    else:
        click.echo("All picks on completed games are scored")


if __name__ == "__main__":
    with app.app_context():
        cli()
