from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel

from core.supabase_client import get_supabase_client
from core.permission_helpers import get_access_level, is_missing_team
from core.logging_config import logger
from dependencies.auth import get_current_user, CurrentUser, USERS_TABLE
from models.user import ProfileUpdate


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# MODELS
# ============================================================
class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


def describe_user(user: CurrentUser) -> dict:
    """Profile plus the derived access level the client renders with."""
    return {
        **user.model_dump(),
        "access_level": get_access_level(user),
        "team_not_configured": is_missing_team(user),
    }


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate user")
def login(payload: LoginRequest):

    email = payload.email.strip().lower()

    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": payload.password}
        )
    except Exception as e:
        # Log the error for debugging but don't expose details to user
        logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
        raise HTTPException(
            status_code=401,
            detail="Invalid email or password"
        )

    if not response.session or not response.session.access_token:
        raise HTTPException(401, "Invalid email or password")

    return TokenResponse(access_token=response.session.access_token)


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/me", summary="Current authenticated user")
def read_me(current_user: CurrentUser = Depends(get_current_user)):
    return describe_user(current_user)


@router.patch("/me", summary="Update current user profile")
def update_profile(
    payload: ProfileUpdate,
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Update the current user's profile (self-service).

    Users can update their own display name and photo.
    Role and team are changed by Core members only.
    """
    updates = {}

    if payload.display_name is not None:
        updates["display_name"] = payload.display_name.strip() or None

    if payload.photo_url is not None:
        updates["photo_url"] = payload.photo_url.strip() or None

    if not updates:
        return describe_user(current_user)

    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        client.table(USERS_TABLE).update(updates).eq("uid", current_user.uid).execute()
    except Exception as e:
        logger.error(f"Failed to update user profile: {e}")
        raise HTTPException(500, f"Failed to update profile: {str(e)}")

    logger.info(f"User {current_user.uid} updated their profile")

    return describe_user(current_user.model_copy(update=updates))
