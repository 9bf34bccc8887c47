# routers/chat.py

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from dependencies.auth import get_current_user, CurrentUser
from core.access_scope import chat_scope
from core.permission_helpers import require_chat_access, COMMON_CHAT_ID
from core.supabase_helpers import require_client, apply_scope
from core.errors import handle_supabase_error
from core.utils import first_row
from core.logging_config import logger
from models.message import ChatMessageCreate


router = APIRouter(
    prefix="/chat",
    tags=["Chat"],
)

MESSAGES_TABLE = "messages"

COMMUNITY_ROOM = {"id": COMMON_CHAT_ID, "name": "Community", "is_common": True}


# ============================================================
# CHAT ROOMS
# ============================================================
@router.get("/teams", summary="Teams the caller can chat in")
def list_chat_teams(current_user: CurrentUser = Depends(get_current_user)):
    """
    The community room comes first and is listed for everyone,
    followed by the team rooms the caller may open.
    """
    scope = chat_scope(current_user)
    if scope.is_empty:
        return {"success": True, "data": [COMMUNITY_ROOM], "no_team_assigned": True}

    client = require_client()

    try:
        query = apply_scope(client.table("teams").select("*"), scope, team_column="id")
        result = query.order("name").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch chat teams")

    rooms = [COMMUNITY_ROOM] + [
        {"id": str(team.get("id")), "name": team.get("name"), "is_common": False}
        for team in (result.data or [])
    ]
    return {"success": True, "data": rooms, "no_team_assigned": False}


# ============================================================
# MESSAGES
# ============================================================
@router.get("/{team_id}/messages", summary="List team chat messages")
def list_messages(
    team_id: str,
    limit: int = Query(100, ge=1, le=500),
    current_user: CurrentUser = Depends(get_current_user),
):
    require_chat_access(current_user, team_id)

    client = require_client()

    try:
        result = (
            client.table(MESSAGES_TABLE)
            .select("*")
            .eq("team_id", team_id)
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch messages")

    # Oldest first for display
    messages = list(reversed(result.data or []))
    return {"success": True, "data": messages}


@router.post("/{team_id}/messages", summary="Send a team chat message")
def send_message(
    team_id: str,
    payload: ChatMessageCreate,
    current_user: CurrentUser = Depends(get_current_user),
):
    require_chat_access(current_user, team_id)

    client = require_client()

    message_data = {
        "team_id": team_id,
        "sender_id": current_user.uid,
        "sender_name": current_user.display_name or current_user.email or current_user.uid,
        "text": payload.text,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    try:
        result = client.table(MESSAGES_TABLE).insert(message_data).execute()
    except Exception as e:
        logger.error(f"Failed to send message: {e}")
        raise HTTPException(500, f"Failed to send message: {str(e)}")

    return {"success": True, "data": first_row(result) or message_data}
