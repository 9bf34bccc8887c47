# models/message.py

from pydantic import BaseModel, Field, field_validator


class ChatMessageCreate(BaseModel):
    """Create message model."""
    text: str = Field(..., max_length=4000, description="Message body")

    @field_validator("text")
    def text_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Message cannot be empty")
        return v
