"""Student schema definitions."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StudentCreate(BaseModel):
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    id_number: str = Field(max_length=20, description="School id number, unique.")
    email: str = Field(max_length=100)
    course: str = Field(max_length=100)


class StudentUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    id_number: Optional[str] = Field(default=None, max_length=20)
    email: Optional[str] = Field(default=None, max_length=100)
    course: Optional[str] = Field(default=None, max_length=100)


class StudentSummary(BaseModel):
    """Fields shown next to attendance and grade rows."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    id_number: str


class Student(StudentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
