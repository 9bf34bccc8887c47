# routers/tasks.py

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from dependencies.auth import (
    get_current_user,
    CurrentUser,
    requires_permission,
    USERS_TABLE,
)
from core.access_scope import task_scope, team_scope
from core.permission_helpers import (
    can_assign_tasks,
    selectable_teams,
    require_team_target,
    require_task_status_change,
    require_task_full_edit,
)
from core.supabase_helpers import require_client, apply_scope, fetch_one
from core.errors import handle_supabase_error
from core.utils import first_row
from core.logging_config import logger
from models.enums import TaskStatus
from models.task import TaskCreate, TaskUpdate, TaskStatusUpdate, TaskAssign, TaskAssignee


router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
)

TASKS_TABLE = "tasks"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# -----------------------------------------------------
# Helper: snapshot the assignee from their profile
# -----------------------------------------------------
def assignee_snapshot(client, assignee_id: str, team_id: str) -> dict:
    """
    Assignees are picked from the members of the target team.
    """
    result = (
        client.table(USERS_TABLE)
        .select("*")
        .eq("uid", assignee_id)
        .limit(1)
        .execute()
    )
    profile = first_row(result)
    if not profile:
        raise HTTPException(404, "Assignee not found")

    if profile.get("team_id") != team_id:
        raise HTTPException(400, "Assignee is not a member of this team")

    return TaskAssignee(
        uid=assignee_id,
        name=profile.get("display_name") or profile.get("email"),
        avatar_url=profile.get("photo_url"),
    ).model_dump()


def _update_task(client, task_id: str, data: dict) -> dict:
    data["updated_at"] = _now()
    result = (
        client.table(TASKS_TABLE)
        .update(data)
        .eq("id", task_id)
        .execute()
    )
    row = first_row(result)
    if not row:
        raise HTTPException(404, "Task not found")
    return row


# ============================================================
# LIST TASKS
# ============================================================
@router.get(
    "",
    summary="List Tasks",
    description="""
    Tasks visible to the caller.

    - Core / Semi-core: every task
    - Head / Volunteer: tasks of their team
    - Volunteer without a team: only tasks assigned to them,
      with `no_team_assigned: true`
    - Anyone else without a team: no tasks, `no_team_assigned: true`
    """,
)
def list_tasks(
    status: Optional[TaskStatus] = Query(None, description="Filter by board column"),
    current_user: CurrentUser = Depends(get_current_user),
):
    scope = task_scope(current_user)

    if scope.is_empty:
        return {"success": True, "data": [], "no_team_assigned": True}

    client = require_client()

    try:
        query = client.table(TASKS_TABLE).select("*")
        query = apply_scope(query, scope)
        if status:
            query = query.eq("status", status.value)
        result = query.order("deadline").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch tasks")

    return {
        "success": True,
        "data": result.data or [],
        "no_team_assigned": scope.no_team_assigned,
    }


# ============================================================
# TEAMS OFFERED IN CREATE / ASSIGN DIALOGS
# ============================================================
@router.get("/assignable-teams", summary="Teams a task can be assigned to")
def list_assignable_teams(current_user: CurrentUser = Depends(get_current_user)):
    if not can_assign_tasks(current_user):
        raise HTTPException(403, "You cannot assign tasks")

    scope = team_scope(current_user)
    if scope.is_empty:
        return {"success": True, "data": [], "no_team_assigned": True}

    client = require_client()

    try:
        query = apply_scope(client.table("teams").select("*"), scope, team_column="id")
        result = query.order("name").execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to fetch teams")

    return {"success": True, "data": selectable_teams(current_user, result.data or [])}


# ============================================================
# CREATE TASK
# ============================================================
@router.post(
    "",
    summary="Create Task",
    dependencies=[Depends(requires_permission("tasks:create"))],
)
def create_task(payload: TaskCreate, current_user: CurrentUser = Depends(get_current_user)):
    require_team_target(current_user, payload.team_id)

    client = require_client()

    try:
        assignee = assignee_snapshot(client, payload.assignee_id, payload.team_id)

        task_data = payload.model_dump(mode="json", exclude={"assignee_id"})
        task_data.update({
            "assignee": assignee,
            "created_by": current_user.uid,
            "created_at": _now(),
            "updated_at": _now(),
        })

        result = client.table(TASKS_TABLE).insert(task_data).execute()
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to create task")

    row = first_row(result)
    if not row:
        raise HTTPException(500, "Insert failed")

    logger.info(f"User {current_user.uid} ({current_user.role}) created task {row.get('id')} in team {payload.team_id}")
    return {"success": True, "data": row}


# ============================================================
# EDIT TASK
# ============================================================
@router.put(
    "/{task_id}",
    summary="Edit Task",
    dependencies=[Depends(requires_permission("tasks:assign"))],
)
def update_task(task_id: str, payload: TaskUpdate, current_user: CurrentUser = Depends(get_current_user)):
    task = fetch_one(TASKS_TABLE, task_id, "task")

    # Both the current and the new team must be selectable
    require_team_target(current_user, task.get("team_id"))
    target_team = payload.team_id or task.get("team_id")
    require_team_target(current_user, target_team)

    update_data = payload.model_dump(mode="json", exclude_unset=True, exclude={"assignee_id"})
    update_data = {k: v for k, v in update_data.items() if v is not None}

    client = require_client()

    try:
        if payload.assignee_id:
            update_data["assignee"] = assignee_snapshot(client, payload.assignee_id, target_team)
        elif payload.team_id and payload.team_id != task.get("team_id"):
            raise HTTPException(400, "Changing the team requires a new assignee")

        if not update_data:
            raise HTTPException(400, "No fields provided to update.")

        row = _update_task(client, task_id, update_data)
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update task")

    logger.info(f"User {current_user.uid} edited task {task_id}")
    return {"success": True, "data": row}


# ============================================================
# REASSIGN TASK
# ============================================================
@router.patch(
    "/{task_id}/assign",
    summary="Reassign Task",
    dependencies=[Depends(requires_permission("tasks:assign"))],
)
def assign_task(task_id: str, payload: TaskAssign, current_user: CurrentUser = Depends(get_current_user)):
    task = fetch_one(TASKS_TABLE, task_id, "task")

    require_team_target(current_user, task.get("team_id"))
    require_team_target(current_user, payload.team_id)

    client = require_client()

    try:
        assignee = assignee_snapshot(client, payload.assignee_id, payload.team_id)
        row = _update_task(client, task_id, {"team_id": payload.team_id, "assignee": assignee})
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to assign task")

    logger.info(f"User {current_user.uid} assigned task {task_id} to {payload.assignee_id}")
    return {"success": True, "data": row}


# ============================================================
# CHANGE STATUS
# ============================================================
@router.patch("/{task_id}/status", summary="Change Task Status")
def change_task_status(task_id: str, payload: TaskStatusUpdate, current_user: CurrentUser = Depends(get_current_user)):
    """
    Core / Semi-core: any task. Head: tasks of their team.
    Anyone: tasks assigned to them.
    """
    task = fetch_one(TASKS_TABLE, task_id, "task")

    try:
        require_task_status_change(current_user, task)
    except HTTPException:
        logger.warning(f"User {current_user.uid} denied status change on task {task_id}")
        raise

    client = require_client()

    try:
        row = _update_task(client, task_id, {"status": payload.status.value})
    except HTTPException:
        raise
    except Exception as e:
        raise handle_supabase_error(e, "Failed to update task status")

    logger.info(f"User {current_user.uid} moved task {task_id} to {payload.status.value}")
    return {"success": True, "data": row}


# ============================================================
# DELETE TASK
# ============================================================
@router.delete("/{task_id}", summary="Delete Task")
def delete_task(task_id: str, current_user: CurrentUser = Depends(get_current_user)):
    task = fetch_one(TASKS_TABLE, task_id, "task")
    require_task_full_edit(current_user, task)

    client = require_client()

    try:
        client.table(TASKS_TABLE).delete().eq("id", task_id).execute()
    except Exception as e:
        raise handle_supabase_error(e, "Failed to delete task")

    logger.info(f"User {current_user.uid} deleted task {task_id}")
    return {"success": True, "deleted_id": task_id}
