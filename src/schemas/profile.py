"""Profile schema definitions."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Profile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""

    username: Optional[str] = Field(default=None, max_length=50)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
