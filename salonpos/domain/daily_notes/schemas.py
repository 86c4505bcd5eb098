"""Daily notes schemas"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class DailyNoteUpsert(BaseModel):
    date: date
    content: str

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        if not v or not v.strip():
            raise ValueError("Content is required")
        return v


class DailyNoteResponse(BaseModel):
    id: Optional[int] = None
    date: date
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
