"""Attendance routes.

The ``/sheet`` endpoints back the attendance page: load every student's
present flag for a subject and date, and save them in one request.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.routes.auth import get_current_account
from core.dependencies import AttendanceManagerDep
from core.exceptions import AttendanceNotFoundError, SubjectNotFoundError
from schemas.attendance import (
    Attendance,
    AttendanceCreate,
    AttendanceSheet,
    AttendanceSheetEntry,
    SaveAttendanceSheetRequest,
)
from schemas.student import StudentSummary

router = APIRouter(
    prefix="/api/attendance",
    tags=["Attendance"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=List[Attendance], summary="List attendance records")
def list_attendance(
    attendance_manager: AttendanceManagerDep,
    subject_id: Optional[str] = None,
    on: Optional[date] = Query(default=None, alias="date"),
    student_id: Optional[str] = None,
) -> List[Attendance]:
    records = attendance_manager.list_records(
        subject_id=subject_id, on=on, student_id=student_id
    )
    return [Attendance.model_validate(r) for r in records]


@router.post("", response_model=Attendance, summary="Record attendance")
def create_attendance(
    req: AttendanceCreate, attendance_manager: AttendanceManagerDep
) -> Attendance:
    return Attendance.model_validate(attendance_manager.create_record(req.model_dump()))


@router.get("/sheet", response_model=AttendanceSheet, summary="Attendance sheet")
def get_sheet(
    attendance_manager: AttendanceManagerDep,
    subject_id: str,
    on: date = Query(alias="date"),
) -> AttendanceSheet:
    try:
        pairs = attendance_manager.get_sheet(subject_id, on)
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return AttendanceSheet(
        subject_id=subject_id,
        date=on,
        entries=[
            AttendanceSheetEntry(
                student=StudentSummary.model_validate(student),
                present=record.present if record else False,
                record_id=record.id if record else None,
            )
            for student, record in pairs
        ],
    )


@router.put("/sheet", response_model=List[Attendance], summary="Save attendance sheet")
def save_sheet(
    req: SaveAttendanceSheetRequest, attendance_manager: AttendanceManagerDep
) -> List[Attendance]:
    try:
        records = attendance_manager.save_sheet(
            req.subject_id,
            req.date,
            {mark.student_id: mark.present for mark in req.records},
            fill_absent=req.fill_absent,
        )
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [Attendance.model_validate(r) for r in records]


@router.delete("/{record_id}", summary="Delete an attendance record")
def delete_attendance(record_id: str, attendance_manager: AttendanceManagerDep) -> dict:
    try:
        attendance_manager.delete_record(record_id)
    except AttendanceNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"success": True, "message": "Attendance record deleted successfully"}
