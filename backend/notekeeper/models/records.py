from typing import Optional

from pydantic import BaseModel, Field

from notekeeper.models.common import KEY_PATTERN


class CategoryCreate(BaseModel):
    id: str = Field(pattern=KEY_PATTERN)
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=1_000)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1_000)


class CategoryOut(BaseModel):
    id: str
    name: str
    description: str
    created_by: str
    created_at: str


class ReminderCreate(BaseModel):
    id: str = Field(pattern=KEY_PATTERN)
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=1_000)
    type: str = Field(default="", max_length=32)


class ReminderUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1_000)
    type: Optional[str] = Field(default=None, max_length=32)


class ReminderOut(BaseModel):
    id: str
    name: str
    description: str
    type: str
    created_by: str
    created_at: str
