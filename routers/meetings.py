# routers/meetings.py

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from dependencies.auth import get_current_user, CurrentUser, requires_permission
from core.access_scope import meeting_scope
from core.supabase_helpers import require_client, apply_scope
from core.errors import handle_supabase_error
from core.utils import first_row
from core.logging_config import logger
from models.meeting import MeetingCreate


router = APIRouter(
    prefix="/meetings",
    tags=["Meetings"],
)

MEETINGS_TABLE = "meetings"


# ============================================================
# LIST MEETINGS
# ============================================================
@router.get("", summary="List Meetings")
def list_meetings(
    upcoming: Optional[bool] = Query(None, description="true = upcoming only, false = past only"),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Core / Semi-core see every meeting. Team members see their
    team's meetings plus meetings scheduled for all teams.
    """
    scope = meeting_scope(current_user)
    if scope.is_empty:
        return {"success": True, "data": [], "no_team_assigned": True}

    client = require_client()

    try:
        query = apply_scope(client.table(MEETINGS_TABLE).select("*"), scope)

        if upcoming is not None:
            now = datetime.now(timezone.utc).isoformat()
            query = query.gte("scheduled_date", now) if upcoming else query.lt("scheduled_date", now)

        result = query.order("scheduled_date").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch meetings")

    return {"success": True, "data": result.data or [], "no_team_assigned": False}


# ============================================================
# CREATE MEETING
# ============================================================
@router.post(
    "",
    summary="Schedule Meeting",
    dependencies=[Depends(requires_permission("meetings:create"))],
)
def create_meeting(payload: MeetingCreate, current_user: CurrentUser = Depends(get_current_user)):
    client = require_client()

    meeting_data = {
        **payload.model_dump(mode="json"),
        "title": payload.title.strip(),
        "description": (payload.description or "").strip() or None,
        "meeting_link": payload.meeting_link.strip(),
        "created_by": current_user.uid,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }

    try:
        result = client.table(MEETINGS_TABLE).insert(meeting_data).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to create meeting")

    row = first_row(result)
    if not row:
        raise HTTPException(500, "Insert failed")

    logger.info(f"User {current_user.uid} scheduled meeting for {payload.team_id or 'all teams'}")
    return {"success": True, "data": row}


# ============================================================
# DELETE MEETING
# ============================================================
@router.delete(
    "/{meeting_id}",
    summary="Delete Meeting",
    dependencies=[Depends(requires_permission("meetings:create"))],
)
def delete_meeting(meeting_id: str, current_user: CurrentUser = Depends(get_current_user)):
    client = require_client()

    try:
        result = client.table(MEETINGS_TABLE).delete().eq("id", meeting_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to delete meeting")

    if not result.data:
        raise HTTPException(404, "Meeting not found")

    logger.info(f"User {current_user.uid} deleted meeting {meeting_id}")
    return {"success": True, "deleted_id": meeting_id}
