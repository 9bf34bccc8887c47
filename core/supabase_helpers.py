# core/supabase_helpers.py

from fastapi import HTTPException

from core.access_scope import AccessScope
from core.utils import first_row
from core.errors import handle_supabase_error
from core.supabase_client import get_supabase_client
from models.enums import ScopeKind


# =================================================================
#  CLIENT
# =================================================================

def require_client():
    """Supabase client, or 500 when the service is not configured."""
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


# =================================================================
#  SCOPE → QUERY FILTERS
# =================================================================

def apply_scope(query, scope: AccessScope, team_column: str = "team_id", assignee_column: str = "assignee->>uid"):
    """
    Narrow a Supabase select to what the scope allows.

    Callers must check scope.is_empty first; a no_team scope
    has no filter form and is rejected here.
    """
    if scope.kind is ScopeKind.all:
        return query

    if scope.kind is ScopeKind.team:
        if scope.include_unassigned:
            return query.or_(f"{team_column}.eq.{scope.team_id},{team_column}.is.null")
        return query.eq(team_column, scope.team_id)

    if scope.kind is ScopeKind.assignee:
        return query.eq(assignee_column, scope.uid)

    raise ValueError("A no_team scope cannot be turned into a query")


# =================================================================
#  SINGLE ROW FETCH
# =================================================================

def fetch_one(table: str, row_id: str, label: str, id_column: str = "id") -> dict:
    """
    Fetch a row by id or raise 404.
    """
    client = require_client()

    try:
        result = (
            client.table(table)
            .select("*")
            .eq(id_column, row_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, f"Failed to fetch {label}")

    row = first_row(result)
    if not row:
        raise HTTPException(404, f"{label.capitalize()} not found")
    return row
