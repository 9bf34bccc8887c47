# routers/users.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from dependencies.auth import get_current_user, CurrentUser, requires_permission, USERS_TABLE
from core.access_scope import user_directory_scope
from core.permission_helpers import normalize_role_team_assignment
from core.supabase_helpers import require_client, apply_scope, fetch_one
from core.errors import RoleTeamAssignmentError, handle_supabase_error, role_team_error
from core.utils import first_row
from core.logging_config import logger
from models.user import UserCreate, UserRead, UserRoleUpdate, UserTeamUpdate


router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


def _save_profile(client, uid: str, data: dict) -> dict:
    result = (
        client.table(USERS_TABLE)
        .update(data)
        .eq("uid", uid)
        .execute()
    )
    row = first_row(result)
    if not row:
        raise HTTPException(404, "User not found")
    return UserRead(**row).model_dump(mode="json")


def _normalized_team(role, team_id) -> Optional[str]:
    try:
        return normalize_role_team_assignment(role, team_id)
    except RoleTeamAssignmentError as e:
        raise role_team_error(e)


# -----------------------------------------------------
# LIST USERS
# -----------------------------------------------------
@router.get("", summary="List users visible to the caller")
def list_users(
    team_id: Optional[str] = Query(None, description="Only members of this team"),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Core / Semi-core see everyone. Head / Volunteer see their team.
    """
    scope = user_directory_scope(current_user)
    if scope.is_empty:
        return {"success": True, "data": [], "no_team_assigned": True}

    client = require_client()

    try:
        query = apply_scope(client.table(USERS_TABLE).select("*"), scope)
        if team_id and scope.is_unrestricted:
            query = query.eq("team_id", team_id)
        result = query.order("display_name").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch users")

    users = [UserRead(**row).model_dump(mode="json") for row in (result.data or [])]
    return {"success": True, "data": users, "no_team_assigned": False}


# -----------------------------------------------------
# CREATE USER (auth account + profile row)
# -----------------------------------------------------
@router.post(
    "",
    summary="Create user",
    dependencies=[Depends(requires_permission("users:create"))],
)
def create_user(payload: UserCreate, current_user: CurrentUser = Depends(get_current_user)):
    team_id = _normalized_team(payload.role, payload.team_id)

    client = require_client()

    create_payload = {
        "email": payload.email,
        "password": payload.password,
        "email_confirm": True,
        "user_metadata": {"display_name": payload.display_name},
    }

    try:
        user_resp = client.auth.admin.create_user(create_payload)
    except Exception as e:
        msg = str(e).lower()
        if "already" in msg and "registered" in msg:
            raise HTTPException(400, f"User {payload.email} already exists")
        logger.error(f"Supabase user creation failed: {e}")
        raise HTTPException(500, f"Supabase user creation failed: {e}")

    new_uid = getattr(getattr(user_resp, "user", None), "id", None)
    if not new_uid:
        raise HTTPException(500, "Supabase did not return the new user id")

    profile = {
        "uid": new_uid,
        "email": payload.email,
        "display_name": payload.display_name.strip(),
        "role": payload.role.value,
        "team_id": team_id,
    }

    try:
        result = client.table(USERS_TABLE).insert(profile).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to create user profile")

    logger.info(f"User {current_user.uid} created {new_uid} as {payload.role}")
    return {"success": True, "data": first_row(result) or profile}


# -----------------------------------------------------
# CHANGE ROLE
# -----------------------------------------------------
@router.patch(
    "/{uid}/role",
    summary="Change a user's role",
    dependencies=[Depends(requires_permission("permissions:manage"))],
)
def update_user_role(uid: str, payload: UserRoleUpdate, current_user: CurrentUser = Depends(get_current_user)):
    """
    Promoting to Core / Semi-core clears the team.
    Demoting to Head / Volunteer keeps the current team unless a
    team_id is sent along; either way a team must exist.
    """
    target = UserRead(**fetch_one(USERS_TABLE, uid, "user", id_column="uid"))
    requested_team = payload.team_id if "team_id" in payload.model_fields_set else target.team_id
    team_id = _normalized_team(payload.role, requested_team)

    client = require_client()

    try:
        row = _save_profile(client, uid, {"role": payload.role.value, "team_id": team_id})
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update role")

    logger.info(f"User {current_user.uid} changed role of {uid} from {target.role} to {payload.role}")
    return {"success": True, "data": row}


# -----------------------------------------------------
# CHANGE TEAM
# -----------------------------------------------------
@router.patch(
    "/{uid}/team",
    summary="Move a user to another team",
    dependencies=[Depends(requires_permission("permissions:manage"))],
)
def update_user_team(uid: str, payload: UserTeamUpdate, current_user: CurrentUser = Depends(get_current_user)):
    target = UserRead(**fetch_one(USERS_TABLE, uid, "user", id_column="uid"))
    team_id = _normalized_team(target.role, payload.team_id)

    client = require_client()

    try:
        row = _save_profile(client, uid, {"team_id": team_id})
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update team")

    logger.info(f"User {current_user.uid} moved {uid} to team {team_id}")
    return {"success": True, "data": row}
