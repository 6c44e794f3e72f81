"""Grade schema definitions.

Clients send the two scores only. ``average`` is computed by the database
and is rejected if supplied.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from schemas.student import StudentSummary
from utils.standing import grade_standing


class GradeCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    partial_score: float
    exam_score: float
    student_id: str
    subject_id: str


class GradeUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    partial_score: Optional[float] = None
    exam_score: Optional[float] = None


class GradeEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    student_id: str
    partial_score: float = 0
    exam_score: float = 0


class SaveGradeSheetRequest(BaseModel):
    subject_id: str
    grades: List[GradeEntry]


class Grade(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    partial_score: float
    exam_score: float
    average: Optional[float] = None
    student_id: str
    subject_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    student: Optional[StudentSummary] = Field(default=None)

    @computed_field
    @property
    def standing(self) -> Optional[str]:
        if self.average is None:
            return None
        return grade_standing(self.average)
