# core/access_scope.py

"""
Read scopes derived from the policy predicates.

A scope tells a caller how far a list query may reach:

- all       every row
- team      rows whose team_id equals scope.team_id
- assignee  rows assigned to scope.uid (tasks only)
- no_team   nothing; the caller must show a "no team assigned"
            state instead of an empty list

Scopes are plain values; turning one into a database filter is
done by the caller (see core.supabase_helpers.apply_scope).
"""

from typing import Any, Optional
from pydantic import BaseModel

from core.permission_helpers import (
    get_field,
    non_empty_key,
    can_see_all_teams,
    can_see_all_tasks,
    can_see_all_files,
    can_chat_in_all_teams,
    is_volunteer,
)
from models.enums import ScopeKind


class AccessScope(BaseModel):
    kind: ScopeKind
    team_id: Optional[str] = None
    uid: Optional[str] = None

    # Meetings scheduled for every team (team_id NULL) stay visible
    include_unassigned: bool = False

    model_config = {"frozen": True}

    @property
    def is_unrestricted(self) -> bool:
        return self.kind is ScopeKind.all

    @property
    def no_team_assigned(self) -> bool:
        """
        True when the user only reaches this far because they have
        no team. Drives the explicit "no team assigned" state.
        """
        return self.kind in (ScopeKind.no_team, ScopeKind.assignee)

    @property
    def is_empty(self) -> bool:
        return self.kind is ScopeKind.no_team


ALL = AccessScope(kind=ScopeKind.all)
NO_TEAM = AccessScope(kind=ScopeKind.no_team)


def _team_scope_or_none(profile: Any, **extra) -> AccessScope:
    team_id = non_empty_key(get_field(profile, "team_id"))
    if team_id is None:
        return NO_TEAM
    return AccessScope(kind=ScopeKind.team, team_id=team_id, **extra)


def team_scope(profile: Any) -> AccessScope:
    """Teams listed on the teams / settings pages and task dialogs."""
    if can_see_all_teams(profile):
        return ALL
    return _team_scope_or_none(profile)


def task_scope(profile: Any) -> AccessScope:
    """
    Tasks on the board. A Volunteer without a team still sees
    tasks assigned directly to them.
    """
    if can_see_all_tasks(profile):
        return ALL
    scope = _team_scope_or_none(profile)
    if scope.is_empty and is_volunteer(profile):
        uid = non_empty_key(get_field(profile, "uid"))
        if uid is not None:
            return AccessScope(kind=ScopeKind.assignee, uid=uid)
    return scope


def file_scope(profile: Any) -> AccessScope:
    if can_see_all_files(profile):
        return ALL
    return _team_scope_or_none(profile)


def meeting_scope(profile: Any) -> AccessScope:
    if can_see_all_teams(profile):
        return ALL
    return _team_scope_or_none(profile, include_unassigned=True)


def chat_scope(profile: Any) -> AccessScope:
    """Teams whose chat rooms the user may open."""
    if can_chat_in_all_teams(profile):
        return ALL
    return _team_scope_or_none(profile)


def user_directory_scope(profile: Any) -> AccessScope:
    """Users listed for assignment and on the people page."""
    if can_see_all_teams(profile):
        return ALL
    return _team_scope_or_none(profile)
