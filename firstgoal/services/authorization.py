"""
Capability predicates for league administration

Identity is established upstream; this module only answers whether the
already-identified caller may act on a league.
"""

from flask import current_app, request

from firstgoal.models import LeagueMember

SYSTEM_CALLER = "system"


class AuthorizationDenied(Exception):
    """The caller lacks the role an operation requires"""


class LeagueAuthorizer:
    def __init__(self, caller_id, super_admin_ids=frozenset()):
        self.caller_id = caller_id
        self.super_admin_ids = frozenset(super_admin_ids)

    def __repr__(self):
        return f"<LeagueAuthorizer caller={self.caller_id}>"

    @classmethod
    def from_request(cls):
        """Build an authorizer for the member named in the identity header"""
        header = current_app.config["MEMBER_ID_HEADER"]
        caller_id = (request.headers.get(header) or "").strip() or None
        return cls(caller_id, current_app.config.get("SUPER_ADMIN_IDS", frozenset()))

    @classmethod
    def for_system(cls):
        """Authorizer for operator tooling run from the command line"""
        return cls(SYSTEM_CALLER, {SYSTEM_CALLER})

    @property
    def is_super_admin(self):
        return self.caller_id is not None and self.caller_id in self.super_admin_ids

    def _membership(self, league_id):
        if self.caller_id is None:
            return None
        return LeagueMember.query.filter_by(
            league_id=league_id, member_id=self.caller_id
        ).first()

    def caller_is_league_member(self, league_id):
        return self.is_super_admin or self._membership(league_id) is not None

    def caller_is_league_admin(self, league_id):
        if self.is_super_admin:
            return True
        membership = self._membership(league_id)
        return membership is not None and membership.is_admin

    def require_member(self, league_id):
        if not self.caller_is_league_member(league_id):
            raise AuthorizationDenied("Not authorized: must be a league member")

    def require_admin(self, league_id):
        if not self.caller_is_league_admin(league_id):
            raise AuthorizationDenied(
                "Not authorized: must be league admin or super admin"
            )
