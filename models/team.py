from typing import Optional, List
from pydantic import BaseModel, Field, field_validator


# -------------------------------------------------
# Shared Fields
# -------------------------------------------------
class TeamBase(BaseModel):
    name: str = Field(..., min_length=2, description="Team name")
    description: Optional[str] = ""

    @field_validator("name", mode="before")
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


# -------------------------------------------------
# Create Team
# -------------------------------------------------
class TeamCreate(TeamBase):
    """
    Head is optional at creation time and can be assigned later.
    """
    head: Optional[str] = None


# -------------------------------------------------
# Update Team (partial)
# -------------------------------------------------
class TeamUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = None
    head: Optional[str] = Field(None, description="New head uid, or '' to clear")


# -------------------------------------------------
# Membership / icon payloads
# -------------------------------------------------
class TeamMemberAdd(BaseModel):
    uid: str = Field(..., min_length=1)


class TeamIconUpdate(BaseModel):
    icon_url: Optional[str] = None


def replace_head(members: List[str], old_head: Optional[str], new_head: Optional[str]) -> List[str]:
    """
    Swap the head inside the member list.

    The previous head leaves the team, the new head joins it.
    Order of the remaining members is kept.
    """
    updated = [m for m in (members or []) if not (old_head and m == old_head)]
    if new_head and new_head not in updated:
        updated.append(new_head)
    return updated
