"""
Pytest configuration and fixtures for tests
"""
import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from firstgoal import create_app, db
from firstgoal.models import Game, League, Season
from firstgoal.services import LeagueAuthorizer


@pytest.fixture
def app():
    """Create the application with an in-memory database"""
    app = create_app("testing")
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create Flask test client"""
    with app.test_client() as client:
        yield client


@pytest.fixture
def league(app):
    """League with one admin (alice) and two members (bob, carol)"""
    league = League(name="Kraken Faithful", team_id="SEA")
    db.session.add(league)
    db.session.flush()
    league.add_member("alice", display_name="Alice", role="admin")
    league.add_member("bob", display_name="Bob")
    league.add_member("carol", display_name="Carol")
    db.session.commit()
    return league


@pytest.fixture
def season(league):
    season = Season.create_season(league, "2025-26")
    db.session.flush()
    season.activate()
    db.session.commit()
    return season


def make_game(season, deadline, opponent="Vancouver"):
    game = Game(
        league_id=season.league_id,
        season_id=season.id,
        opponent=opponent,
        puck_drop=deadline,
        deadline=deadline,
    )
    db.session.add(game)
    db.session.commit()
    return game


@pytest.fixture
def open_game(season):
    """Game whose pick window is still open"""
    return make_game(season, datetime.now(timezone.utc) + timedelta(days=1))


@pytest.fixture
def closed_game(season):
    """Game whose pick window has closed"""
    return make_game(season, datetime.now(timezone.utc) - timedelta(hours=1), "Calgary")


def authorizer_for(member_id):
    return LeagueAuthorizer(member_id, {"root"})


@pytest.fixture
def admin():
    return authorizer_for("alice")


def headers_for(member_id):
    return {"X-Member-Id": member_id}
