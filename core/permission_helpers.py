from fastapi import Depends, HTTPException
from typing import Any, Iterable, List, Optional

from dependencies.auth import get_current_user, CurrentUser
from core.permissions import ROLE_PERMISSIONS
from core.errors import RoleTeamAssignmentError
from models.enums import Role, AccessLevel, GLOBAL_ROLES, TEAM_SCOPED_ROLES


# Chat room shared by all members, outside any team
COMMON_CHAT_ID = "common"


# -----------------------------------------------------
# Field access that tolerates models, raw rows and None
# -----------------------------------------------------
def get_field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def non_empty_key(value: Any) -> Optional[str]:
    """Partition / owner keys: only non-empty strings count."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _same_key(a: Any, b: Any) -> bool:
    a, b = non_empty_key(a), non_empty_key(b)
    return a is not None and a == b


def role_of(profile: Any) -> Optional[Role]:
    """
    The profile's role, or None when there is no profile
    or the stored value is not one of the five roles.
    """
    raw = get_field(profile, "role")
    if raw is None:
        return None
    try:
        return Role(raw)
    except (ValueError, TypeError):
        return None


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def get_effective_permissions(profile: Any) -> set:
    role = role_of(profile)
    if role is None:
        return set()
    return set(ROLE_PERMISSIONS.get(role, []))


def has_permission(profile: Any, permission: str) -> bool:
    return permission in get_effective_permissions(profile)


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(permission: str):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission("tasks:create"))])
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_permission(current_user, permission):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{permission}' required"
            )
        return current_user

    return dependency


# ============================================================
# ROLE PREDICATES
# ============================================================

def is_core(profile: Any) -> bool:
    return role_of(profile) is Role.core


def is_semi_core(profile: Any) -> bool:
    return role_of(profile) is Role.semi_core


def is_head(profile: Any) -> bool:
    return role_of(profile) is Role.head


def is_volunteer(profile: Any) -> bool:
    return role_of(profile) is Role.volunteer


# ============================================================
# CAPABILITY PREDICATES
# ============================================================

def can_manage_permissions(profile: Any) -> bool:
    """Change roles and team assignments. Core only."""
    return has_permission(profile, "permissions:manage")


def can_create_users(profile: Any) -> bool:
    return has_permission(profile, "users:create")


def can_create_teams(profile: Any) -> bool:
    return has_permission(profile, "teams:create")


def can_manage_teams(profile: Any) -> bool:
    """Edit / delete teams and their membership. Core only."""
    return has_permission(profile, "teams:manage")


def can_assign_tasks(profile: Any) -> bool:
    """
    Core and Semi-core assign to any team,
    Head assigns within their own team.
    """
    return has_permission(profile, "tasks:assign")


def can_create_tasks(profile: Any) -> bool:
    return has_permission(profile, "tasks:create")


def can_see_all_teams(profile: Any) -> bool:
    return has_permission(profile, "teams:read_all")


def can_see_all_tasks(profile: Any) -> bool:
    return has_permission(profile, "tasks:read_all")


def can_see_all_files(profile: Any) -> bool:
    return has_permission(profile, "files:read_all")


def can_upload_to_any_team(profile: Any) -> bool:
    """Head and Volunteer upload to their own team only."""
    return has_permission(profile, "files:upload_any")


def can_access_teams_page(profile: Any) -> bool:
    """Volunteers cannot open the teams page."""
    return has_permission(profile, "teams_page:access")


def can_chat_in_all_teams(profile: Any) -> bool:
    return has_permission(profile, "chat:all_teams")


def can_create_meetings(profile: Any) -> bool:
    return has_permission(profile, "meetings:create")


def get_access_level(profile: Any) -> AccessLevel:
    """
    Effective access level, checked in priority order so the
    answer stays well defined even for inconsistent data.
    """
    if is_core(profile):
        return AccessLevel.core
    if is_semi_core(profile):
        return AccessLevel.semi_core
    if is_head(profile):
        return AccessLevel.head
    if is_volunteer(profile):
        return AccessLevel.volunteer
    return AccessLevel.none


# ============================================================
# RESOURCE-SCOPED RULES
# ============================================================

def can_fully_edit_task(profile: Any, task: Any) -> bool:
    """Core/Semi-core edit any task, a Head edits tasks of their own team."""
    if can_see_all_tasks(profile):
        return True
    return is_head(profile) and _same_key(get_field(profile, "team_id"), get_field(task, "team_id"))


def is_task_assignee(profile: Any, task: Any) -> bool:
    assignee = get_field(task, "assignee")
    return _same_key(get_field(profile, "uid"), get_field(assignee, "uid"))


def can_change_task_status(profile: Any, task: Any) -> bool:
    """
    Full editors change any status; everyone else only
    the status of tasks assigned to them, whatever their team.
    """
    return can_fully_edit_task(profile, task) or is_task_assignee(profile, task)


def can_edit_task(profile: Any, task: Any = None) -> bool:
    return can_assign_tasks(profile)


def can_reassign_task(profile: Any, task: Any = None) -> bool:
    return can_assign_tasks(profile)


def can_target_team(profile: Any, team_id: Any) -> bool:
    """Whether a task may be created in / moved to team_id."""
    if non_empty_key(team_id) is None:
        return False
    if can_see_all_teams(profile):
        return True
    return _same_key(get_field(profile, "team_id"), team_id)


def selectable_teams(profile: Any, teams: Iterable[Any]) -> List[Any]:
    """Teams offered when creating or reassigning a task."""
    teams = list(teams or [])
    if can_see_all_teams(profile):
        return teams
    team_id = non_empty_key(get_field(profile, "team_id"))
    if team_id is None:
        return []
    return [t for t in teams if get_field(t, "id") == team_id]


def can_modify_file(profile: Any, file: Any) -> bool:
    """Delete / rename: see-all roles or the uploader."""
    if can_see_all_files(profile):
        return True
    return _same_key(get_field(profile, "uid"), get_field(file, "uploaded_by"))


def can_upload_to_team(profile: Any, team_id: Any) -> bool:
    if non_empty_key(team_id) is None:
        return False
    if can_upload_to_any_team(profile):
        return True
    return _same_key(get_field(profile, "team_id"), team_id)


def can_chat_in_team(profile: Any, team_id: Any) -> bool:
    """The community room is open to every signed-in user, team or not."""
    if non_empty_key(team_id) is None:
        return False
    if team_id == COMMON_CHAT_ID:
        return non_empty_key(get_field(profile, "uid")) is not None
    if can_chat_in_all_teams(profile):
        return True
    return _same_key(get_field(profile, "team_id"), team_id)


def can_manage_team_icon(profile: Any, team_id: Any) -> bool:
    if not can_access_teams_page(profile):
        return False
    if can_see_all_teams(profile):
        return non_empty_key(team_id) is not None
    return _same_key(get_field(profile, "team_id"), team_id)


def is_missing_team(profile: Any) -> bool:
    """A team-scoped role without a team: not fully configured."""
    return role_of(profile) in TEAM_SCOPED_ROLES and non_empty_key(get_field(profile, "team_id")) is None


# ============================================================
# ROLE / TEAM NORMALIZATION (run before every profile write)
# ============================================================

def normalize_role_team_assignment(role: Any, team_id: Any) -> Optional[str]:
    """
    Return the team_id to persist for a user with this role.

    - Core / Semi-core: always no team
    - Head / Volunteer: a non-empty team is required
    - Unassigned: kept as given (blank becomes no team)

    Raises RoleTeamAssignmentError when the pair cannot be stored.
    """
    try:
        role = Role(role)
    except (ValueError, TypeError):
        raise RoleTeamAssignmentError(f"Invalid role: {role}")

    team_id = team_id.strip() if isinstance(team_id, str) else team_id
    team_id = team_id or None

    if role in GLOBAL_ROLES:
        return None

    if role in TEAM_SCOPED_ROLES and team_id is None:
        raise RoleTeamAssignmentError(
            f"Team is required for {role.value} role"
        )

    return team_id


# ============================================================
# RAISING GUARDS (for routes)
# ============================================================

def require_task_status_change(user: Any, task: Any):
    if not can_change_task_status(user, task):
        raise HTTPException(
            status_code=403,
            detail="You can only change the status of tasks assigned to you.",
        )


def require_task_full_edit(user: Any, task: Any):
    if not can_fully_edit_task(user, task):
        raise HTTPException(
            status_code=403,
            detail="You do not have permission to modify this task.",
        )


def require_team_target(user: Any, team_id: Any):
    if not can_target_team(user, team_id):
        raise HTTPException(
            status_code=403,
            detail=f"You cannot assign tasks to team {team_id}",
        )


def require_file_modify(user: Any, file: Any):
    if not can_modify_file(user, file):
        raise HTTPException(
            status_code=403,
            detail="You can only modify files you uploaded.",
        )


def require_chat_access(user: Any, team_id: Any):
    if not can_chat_in_team(user, team_id):
        raise HTTPException(
            status_code=403,
            detail=f"You do not have access to team {team_id} chat",
        )
