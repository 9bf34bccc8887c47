from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .enums import FileType


class FileCreate(BaseModel):
    """
    Registers an already-stored file (storage URL comes from the client).
    """
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    type: FileType = FileType.other
    team_id: str = Field(..., min_length=1)

    @field_validator("name", mode="before")
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class FileRename(BaseModel):
    name: str

    @field_validator("name")
    def name_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("File name cannot be empty")
        return v


class FileRead(BaseModel):
    id: str
    name: str
    url: Optional[str] = None
    type: FileType = FileType.other
    team_id: Optional[str] = None
    uploaded_by: Optional[str] = None
    upload_date: Optional[datetime] = None

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)

    @field_validator("type", mode="before")
    def unknown_type(cls, v):
        return v if v in FileType.list() else FileType.other
