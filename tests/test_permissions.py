# tests/test_permissions.py

"""
Tests for the role and capability predicates.
"""

import pytest

from core import permission_helpers as ph
from models.enums import Role, AccessLevel


ROLES = [Role.core, Role.semi_core, Role.head, Role.volunteer, Role.unassigned]

CORE_ONLY = {Role.core}
GLOBAL = {Role.core, Role.semi_core}
LEADS = {Role.core, Role.semi_core, Role.head}

CAPABILITIES = [
    (ph.can_manage_permissions, CORE_ONLY),
    (ph.can_create_users, CORE_ONLY),
    (ph.can_create_teams, CORE_ONLY),
    (ph.can_manage_teams, CORE_ONLY),
    (ph.can_assign_tasks, LEADS),
    (ph.can_create_tasks, LEADS),
    (ph.can_see_all_teams, GLOBAL),
    (ph.can_see_all_tasks, GLOBAL),
    (ph.can_see_all_files, GLOBAL),
    (ph.can_upload_to_any_team, GLOBAL),
    (ph.can_access_teams_page, LEADS),
    (ph.can_chat_in_all_teams, GLOBAL),
    (ph.can_create_meetings, GLOBAL),
]


def profile(role, team_id="T1", uid="U1"):
    return {"uid": uid, "role": role.value, "team_id": team_id}


@pytest.mark.parametrize("predicate,allowed", CAPABILITIES, ids=lambda p: getattr(p, "__name__", None))
@pytest.mark.parametrize("role", ROLES, ids=str)
def test_capability_by_role(predicate, allowed, role):
    assert predicate(profile(role)) is (role in allowed)


@pytest.mark.parametrize("predicate,_", CAPABILITIES, ids=lambda p: getattr(p, "__name__", None))
def test_missing_profile_is_least_privileged(predicate, _):
    assert predicate(None) is False
    assert predicate({}) is False


def test_role_predicates_match_exactly_one_role():
    checks = [ph.is_core, ph.is_semi_core, ph.is_head, ph.is_volunteer]
    for role in ROLES:
        matches = [check.__name__ for check in checks if check(profile(role))]
        assert len(matches) == (0 if role is Role.unassigned else 1)


def test_role_match_is_case_sensitive():
    lowercase = {"uid": "U1", "role": "core"}
    assert ph.is_core(lowercase) is False
    assert ph.can_manage_permissions(lowercase) is False
    assert ph.get_access_level(lowercase) is AccessLevel.none


def test_unknown_role_string_has_no_capabilities():
    weird = {"uid": "U1", "role": "Admin", "team_id": "T1"}
    assert ph.get_effective_permissions(weird) == set()
    assert ph.can_assign_tasks(weird) is False


@pytest.mark.parametrize("role,level", [
    (Role.core, AccessLevel.core),
    (Role.semi_core, AccessLevel.semi_core),
    (Role.head, AccessLevel.head),
    (Role.volunteer, AccessLevel.volunteer),
    (Role.unassigned, AccessLevel.none),
])
def test_access_level(role, level):
    assert ph.get_access_level(profile(role)) is level


def test_access_level_without_profile():
    assert ph.get_access_level(None) is AccessLevel.none


def test_predicates_accept_models(make_user):
    head = make_user(Role.head, team_id="T1")
    assert ph.can_assign_tasks(head) is True
    assert ph.can_see_all_tasks(head) is False


def test_predicates_do_not_mutate_profile():
    p = profile(Role.head)
    snapshot = dict(p)
    for predicate, _ in CAPABILITIES:
        predicate(p)
    ph.get_access_level(p)
    assert p == snapshot


def test_is_missing_team():
    assert ph.is_missing_team(profile(Role.head, team_id=None)) is True
    assert ph.is_missing_team(profile(Role.volunteer, team_id="")) is True
    assert ph.is_missing_team(profile(Role.volunteer, team_id="T1")) is False
    assert ph.is_missing_team(profile(Role.core, team_id=None)) is False
    assert ph.is_missing_team(profile(Role.unassigned, team_id=None)) is False
    assert ph.is_missing_team(None) is False


def test_requires_permission_dependency_rejects(client, login_as, make_user, fake_supabase):
    fake_supabase()
    login_as(make_user(Role.semi_core))

    response = client.post("/teams", json={"name": "Outreach"})

    assert response.status_code == 403
    assert "teams:create" in response.json()["detail"]
