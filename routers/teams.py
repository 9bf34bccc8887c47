# routers/teams.py

from fastapi import APIRouter, Depends, HTTPException

from dependencies.auth import get_current_user, CurrentUser, requires_permission
from core.access_scope import team_scope
from core.permission_helpers import can_access_teams_page, can_manage_team_icon
from core.supabase_helpers import require_client, apply_scope, fetch_one
from core.errors import handle_supabase_error
from core.utils import sanitize, first_row
from core.logging_config import logger
from models.team import TeamCreate, TeamUpdate, TeamMemberAdd, TeamIconUpdate, replace_head


router = APIRouter(
    prefix="/teams",
    tags=["Teams"],
)

TEAMS_TABLE = "teams"


def _save_team(client, team_id: str, data: dict) -> dict:
    result = (
        client.table(TEAMS_TABLE)
        .update(data)
        .eq("id", team_id)
        .execute()
    )
    row = first_row(result)
    if not row:
        raise HTTPException(404, f"Team '{team_id}' not found")
    return row


# ============================================================
# LIST TEAMS
# ============================================================
@router.get("", summary="List Teams")
def list_teams(current_user: CurrentUser = Depends(get_current_user)):
    """
    Core / Semi-core see every team, Head their own.
    Volunteers cannot open the teams page.
    """
    if not can_access_teams_page(current_user):
        raise HTTPException(403, "You do not have access to the teams page")

    scope = team_scope(current_user)
    if scope.is_empty:
        return {"success": True, "data": [], "no_team_assigned": True}

    client = require_client()

    try:
        query = apply_scope(client.table(TEAMS_TABLE).select("*"), scope, team_column="id")
        result = query.order("name").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch teams")

    return {"success": True, "data": result.data or [], "no_team_assigned": False}


# ============================================================
# CREATE TEAM
# ============================================================
@router.post(
    "",
    summary="Create Team",
    dependencies=[Depends(requires_permission("teams:create"))],
)
def create_team(payload: TeamCreate, current_user: CurrentUser = Depends(get_current_user)):
    client = require_client()

    data = sanitize(payload.model_dump())
    data["description"] = data.get("description") or ""
    data["members"] = [payload.head] if payload.head else []

    try:
        result = client.table(TEAMS_TABLE).insert(data).execute()
    except Exception as e:
        error_detail = str(e).lower()
        if "duplicate" in error_detail or "unique" in error_detail:
            raise HTTPException(400, f"Team '{payload.name}' already exists")
        raise handle_supabase_error(e, "Failed to create team")

    row = first_row(result)
    if not row:
        raise HTTPException(500, "Insert returned no data")

    logger.info(f"User {current_user.uid} created team {payload.name}")
    return {"success": True, "data": row}


# ============================================================
# UPDATE TEAM
# ============================================================
@router.put(
    "/{team_id}",
    summary="Update Team",
    dependencies=[Depends(requires_permission("teams:manage"))],
)
def update_team(team_id: str, payload: TeamUpdate, current_user: CurrentUser = Depends(get_current_user)):
    team = fetch_one(TEAMS_TABLE, team_id, "team")

    update_data = {}
    if payload.name is not None:
        update_data["name"] = payload.name.strip()
    if payload.description is not None:
        update_data["description"] = payload.description.strip()

    # Changing the head swaps them in the member list
    if payload.head is not None:
        new_head = payload.head.strip() or None
        old_head = team.get("head") or None
        if new_head != old_head:
            update_data["head"] = new_head
            update_data["members"] = replace_head(team.get("members") or [], old_head, new_head)

    if not update_data:
        raise HTTPException(400, "No fields provided to update.")

    client = require_client()

    try:
        row = _save_team(client, team_id, update_data)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update team")

    logger.info(f"User {current_user.uid} updated team {team_id}")
    return {"success": True, "data": row}


# ============================================================
# DELETE TEAM
# ============================================================
@router.delete(
    "/{team_id}",
    summary="Delete Team",
    dependencies=[Depends(requires_permission("teams:manage"))],
)
def delete_team(team_id: str, current_user: CurrentUser = Depends(get_current_user)):
    client = require_client()

    try:
        result = client.table(TEAMS_TABLE).delete().eq("id", team_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to delete team")

    if not result.data:
        raise HTTPException(404, f"Team '{team_id}' not found")

    logger.info(f"User {current_user.uid} deleted team {team_id}")
    return {"success": True, "deleted_id": team_id}


# ============================================================
# MEMBERSHIP
# ============================================================
@router.post(
    "/{team_id}/members",
    summary="Add Team Member",
    dependencies=[Depends(requires_permission("teams:manage"))],
)
def add_member(team_id: str, payload: TeamMemberAdd, current_user: CurrentUser = Depends(get_current_user)):
    team = fetch_one(TEAMS_TABLE, team_id, "team")
    members = list(team.get("members") or [])

    if payload.uid in members:
        return {"success": True, "data": team}

    members.append(payload.uid)
    client = require_client()

    try:
        row = _save_team(client, team_id, {"members": members})
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to add team member")

    logger.info(f"User {current_user.uid} added {payload.uid} to team {team_id}")
    return {"success": True, "data": row}


@router.delete(
    "/{team_id}/members/{uid}",
    summary="Remove Team Member",
    dependencies=[Depends(requires_permission("teams:manage"))],
)
def remove_member(team_id: str, uid: str, current_user: CurrentUser = Depends(get_current_user)):
    team = fetch_one(TEAMS_TABLE, team_id, "team")
    members = list(team.get("members") or [])

    if uid not in members:
        raise HTTPException(404, f"User {uid} is not a member of team {team_id}")

    update_data = {"members": [m for m in members if m != uid]}
    if team.get("head") == uid:
        update_data["head"] = None

    client = require_client()

    try:
        row = _save_team(client, team_id, update_data)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to remove team member")

    logger.info(f"User {current_user.uid} removed {uid} from team {team_id}")
    return {"success": True, "data": row}


# ============================================================
# TEAM ICON
# ============================================================
@router.patch("/{team_id}/icon", summary="Update Team Icon")
def update_team_icon(team_id: str, payload: TeamIconUpdate, current_user: CurrentUser = Depends(get_current_user)):
    """
    Core / Semi-core change any team icon, a Head their own team's.
    """
    if not can_manage_team_icon(current_user, team_id):
        raise HTTPException(403, "You cannot change this team's icon")

    client = require_client()

    try:
        row = _save_team(client, team_id, {"icon_url": payload.icon_url})
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update team icon")

    return {"success": True, "data": row}
