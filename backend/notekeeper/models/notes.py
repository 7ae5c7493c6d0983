from typing import Optional

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=50_000)
    category: Optional[str] = Field(default=None, max_length=64)
    priority: Optional[str] = Field(default=None, max_length=32)
    reminders: list[str] = Field(default_factory=list, max_length=100)


class NoteUpdate(BaseModel):
    """Partial update: only fields present in the request body are changed."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=50_000)
    category: Optional[str] = Field(default=None, max_length=64)
    priority: Optional[str] = Field(default=None, max_length=32)
    reminders: Optional[list[str]] = Field(default=None, max_length=100)


class NoteOut(BaseModel):
    note_id: int
    title: str
    description: str
    category: Optional[str]
    priority: Optional[str]
    reminders: list[str]
    created_at: str
    updated_at: str
