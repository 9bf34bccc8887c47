from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.supabase_client import get_supabase_client
from core.logging_config import logger
from models.enums import Role
from models.user import UserProfile


bearer_scheme = HTTPBearer()

USERS_TABLE = "users"


# ============================================================
# Current User Model (latest profile snapshot for this request)
# ============================================================
class CurrentUser(UserProfile):
    """
    The authenticated caller. Loaded fresh on every request so
    policy checks always see the current role and team.
    """
    pass


def load_profile(client, uid: str, email: Optional[str] = None) -> CurrentUser:
    """
    Read the profile row for an auth uid.
    A user without a profile row gets no role and no team.
    """
    result = (
        client.table(USERS_TABLE)
        .select("*")
        .eq("uid", uid)
        .limit(1)
        .execute()
    )
    rows = result.data or []

    if not rows:
        logger.warning(f"Authenticated user {uid} has no profile row")
        return CurrentUser(uid=uid, email=email, role=Role.unassigned)

    row = dict(rows[0])
    row["uid"] = uid
    row.setdefault("email", email)
    return CurrentUser(**row)


# ============================================================
# AUTH DECODING (Supabase: validates JWT + fetches profile)
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> CurrentUser:

    token = credentials.credentials

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.info(f"Token validation failed: {type(e).__name__}")
        raise unauthorized

    if not auth_resp or not auth_resp.user:
        raise unauthorized

    auth_user = auth_resp.user

    # ---------------------------------------------------------
    # Load profile snapshot
    # ---------------------------------------------------------
    try:
        return load_profile(client, auth_user.id, auth_user.email)
    except Exception as e:
        logger.error(f"Failed to load profile for {auth_user.id}: {e}")
        raise HTTPException(500, "Failed to load user profile")


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(permission: str):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real policy logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(permission)


