from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class MeetingCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    meeting_link: str = Field(..., min_length=1)
    scheduled_date: datetime

    # None (or "all") schedules the meeting for every team
    team_id: Optional[str] = None

    @field_validator("scheduled_date", mode="before")
    def parse_scheduled_date(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v

    @field_validator("team_id", mode="before")
    def all_teams(cls, v):
        if v is None or (isinstance(v, str) and v.strip() in ("", "all")):
            return None
        return v
