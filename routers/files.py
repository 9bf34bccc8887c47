# routers/files.py

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from dependencies.auth import get_current_user, CurrentUser
from core.access_scope import file_scope
from core.permission_helpers import can_upload_to_team, require_file_modify
from core.supabase_helpers import require_client, apply_scope, fetch_one
from core.errors import handle_supabase_error
from core.utils import first_row
from core.logging_config import logger
from models.file import FileCreate, FileRename, FileRead


router = APIRouter(
    prefix="/files",
    tags=["Files"],
)

FILES_TABLE = "files"

NO_TEAM_MESSAGE = (
    "You are not currently assigned to a team. "
    "Please contact a Core team member for access."
)


# ============================================================
# LIST FILES
# ============================================================
@router.get(
    "",
    summary="List Files",
    description="""
    Files visible to the caller.

    A user who can neither see every file nor belongs to a team gets
    `no_team_assigned: true` with a message, never a bare empty list.
    """,
)
def list_files(current_user: CurrentUser = Depends(get_current_user)):
    scope = file_scope(current_user)

    if scope.is_empty:
        return {
            "success": True,
            "data": [],
            "no_team_assigned": True,
            "message": NO_TEAM_MESSAGE,
        }

    client = require_client()

    try:
        query = apply_scope(client.table(FILES_TABLE).select("*"), scope)
        result = query.order("upload_date", desc=True).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch files")

    files = [FileRead(**row).model_dump(mode="json") for row in (result.data or [])]
    return {"success": True, "data": files, "no_team_assigned": False}


# ============================================================
# REGISTER FILE
# ============================================================
@router.post("", summary="Register an uploaded file")
def create_file(payload: FileCreate, current_user: CurrentUser = Depends(get_current_user)):
    """
    Core / Semi-core may file into any team; everyone else into their own team.
    """
    if not can_upload_to_team(current_user, payload.team_id):
        raise HTTPException(403, f"You cannot upload files to team {payload.team_id}")

    client = require_client()

    file_data = {
        **payload.model_dump(mode="json"),
        "uploaded_by": current_user.uid,
        "upload_date": datetime.now(timezone.utc).isoformat(),
    }

    try:
        result = client.table(FILES_TABLE).insert(file_data).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to register file")

    row = first_row(result)
    if not row:
        raise HTTPException(500, "Insert failed")

    logger.info(f"User {current_user.uid} uploaded {payload.name} to team {payload.team_id}")
    return {"success": True, "data": row}


# ============================================================
# RENAME FILE
# ============================================================
@router.patch("/{file_id}", summary="Rename File")
def rename_file(file_id: str, payload: FileRename, current_user: CurrentUser = Depends(get_current_user)):
    file = fetch_one(FILES_TABLE, file_id, "file")
    require_file_modify(current_user, file)

    client = require_client()

    try:
        result = (
            client.table(FILES_TABLE)
            .update({"name": payload.name})
            .eq("id", file_id)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to rename file")

    logger.info(f"User {current_user.uid} renamed file {file_id}")
    return {"success": True, "data": first_row(result) or {**file, "name": payload.name}}


# ============================================================
# DELETE FILE
# ============================================================
@router.delete("/{file_id}", summary="Delete File")
def delete_file(file_id: str, current_user: CurrentUser = Depends(get_current_user)):
    file = fetch_one(FILES_TABLE, file_id, "file")
    require_file_modify(current_user, file)

    client = require_client()

    try:
        client.table(FILES_TABLE).delete().eq("id", file_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to delete file")

    logger.info(f"User {current_user.uid} deleted file {file_id}")
    return {"success": True, "deleted_id": file_id}
