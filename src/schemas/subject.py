from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SubjectCreate(BaseModel):
    name: str = Field(max_length=100)
    instructor: str = Field(max_length=100)


class SubjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    instructor: Optional[str] = Field(default=None, max_length=100)


class Subject(SubjectCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
