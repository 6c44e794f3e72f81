"""Dashboard and report schema definitions."""

from typing import List

from pydantic import BaseModel


class GradeBandCount(BaseModel):
    band: str
    count: int


class MonthlyAttendance(BaseModel):
    month: str  # "YYYY-MM"
    rate: float


class DashboardStats(BaseModel):
    total_students: int
    total_subjects: int
    average_grade: float
    attendance_rate: float
    grade_distribution: List[GradeBandCount]
    attendance_trend: List[MonthlyAttendance]


class StudentReportRow(BaseModel):
    student_id: str
    student_name: str
    id_number: str
    attendance_rate: float
    average_grade: float
    performance: str


class SubjectReport(BaseModel):
    subject_id: str
    subject_name: str
    rows: List[StudentReportRow]
