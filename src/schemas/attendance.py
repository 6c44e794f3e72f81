"""Attendance schema definitions.

A *sheet* is the attendance of every student for one subject on one date, the
unit the attendance page loads and saves.
"""

from datetime import date as Date
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.student import StudentSummary


class AttendanceCreate(BaseModel):
    date: Date
    present: bool = False
    student_id: str
    subject_id: str


class Attendance(AttendanceCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: Optional[datetime] = None


class AttendanceMark(BaseModel):
    student_id: str
    present: bool = False


class SaveAttendanceSheetRequest(BaseModel):
    subject_id: str
    date: Date
    records: List[AttendanceMark] = Field(
        description="One mark per student; students left out are saved as absent.",
    )
    fill_absent: bool = Field(
        default=True,
        description="Save every other student as absent, like the attendance page does.",
    )


class AttendanceSheetEntry(BaseModel):
    student: StudentSummary
    present: bool = False
    record_id: Optional[str] = None


class AttendanceSheet(BaseModel):
    subject_id: str
    date: Date
    entries: List[AttendanceSheetEntry]
