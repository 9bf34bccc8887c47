# models/user.py

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from .enums import Role


# ===============================================================
# USER PROFILE (row in the "users" table, keyed by auth uid)
# ===============================================================

class UserProfile(BaseModel):
    """
    Identity record the policy engine decides on.

    team_id is only meaningful for Head / Volunteer.
    """
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    role: Role = Role.unassigned
    team_id: Optional[str] = None

    # Stored rows may carry stale or misspelled roles
    @field_validator("role", mode="before")
    def parse_role(cls, v):
        return Role.parse(v)

    # Empty string is how the old clients wrote "no team"
    @field_validator("team_id", mode="before")
    def blank_team_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class UserRead(UserProfile):
    """
    Returned to API consumers after normalization.
    """
    pass


# ===============================================================
# ADMIN PAYLOADS
# ===============================================================

class UserCreate(BaseModel):
    """
    Used when a Core member creates an account.
    Auth user + profile row are created together.
    """
    email: EmailStr
    password: str = Field(..., min_length=6)
    display_name: str = Field(..., min_length=1)
    role: Role = Role.volunteer
    team_id: Optional[str] = None


class UserRoleUpdate(BaseModel):
    """
    team_id, when sent, moves the user in the same write.
    Needed to demote Core / Semi-core, who hold no team.
    """
    role: Role
    team_id: Optional[str] = None


class UserTeamUpdate(BaseModel):
    """team_id=None or "" removes the user from their team."""
    team_id: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Profile update model for self-service editing."""
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
