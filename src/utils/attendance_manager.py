"""Attendance management utilities.

Besides single-record CRUD this module handles attendance *sheets*: every
student's present flag for one subject on one date, saved as an upsert keyed
on (date, student, subject).
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from core.database import commit_or_rollback
from core.exceptions import AttendanceNotFoundError, SubjectNotFoundError
from models.attendance import AttendanceModel
from models.student import StudentModel
from models.subject import SubjectModel

logger = logging.getLogger(__name__)


class AttendanceManager:
    """Manages attendance records and sheets."""

    def __init__(self, db: Session):
        self.db = db

    def _require_subject(self, subject_id: str) -> SubjectModel:
        subject = self.db.query(SubjectModel).filter(SubjectModel.id == subject_id).first()
        if subject is None:
            raise SubjectNotFoundError(subject_id)
        return subject

    def list_records(
        self,
        subject_id: Optional[str] = None,
        on: Optional[date] = None,
        student_id: Optional[str] = None,
    ) -> List[AttendanceModel]:
        """List attendance records, newest date first.

        Args:
            subject_id: Optional subject filter.
            on: Optional date filter.
            student_id: Optional student filter.

        Returns:
            Matching AttendanceModel rows.
        """
        query = self.db.query(AttendanceModel)
        if subject_id:
            query = query.filter(AttendanceModel.subject_id == subject_id)
        if on:
            query = query.filter(AttendanceModel.date == on)
        if student_id:
            query = query.filter(AttendanceModel.student_id == student_id)
        return query.order_by(AttendanceModel.date.desc()).all()

    def get_record(self, record_id: str) -> AttendanceModel:
        model = (
            self.db.query(AttendanceModel)
            .filter(AttendanceModel.id == record_id)
            .first()
        )
        if model is None:
            raise AttendanceNotFoundError(record_id)
        return model

    def create_record(self, data: Dict[str, Any]) -> AttendanceModel:
        """Insert one record. A second record for the same triple is rejected
        by the unique constraint."""
        model = AttendanceModel(**data)
        self.db.add(model)
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info(
            "Recorded attendance for student %s in subject %s on %s",
            model.student_id,
            model.subject_id,
            model.date,
        )
        return model

    def delete_record(self, record_id: str) -> None:
        model = self.get_record(record_id)
        self.db.delete(model)
        commit_or_rollback(self.db)
        logger.info("Deleted attendance record %s", record_id)

    def get_sheet(
        self, subject_id: str, on: date
    ) -> List[Tuple[StudentModel, Optional[AttendanceModel]]]:
        """Pair every student (by last name) with their record for the day, if any."""
        self._require_subject(subject_id)
        records = {r.student_id: r for r in self.list_records(subject_id=subject_id, on=on)}
        students = (
            self.db.query(StudentModel)
            .order_by(StudentModel.last_name.asc(), StudentModel.first_name.asc())
            .all()
        )
        return [(student, records.get(student.id)) for student in students]

    def save_sheet(
        self,
        subject_id: str,
        on: date,
        marks: Dict[str, bool],
        fill_absent: bool = True,
    ) -> List[AttendanceModel]:
        """Upsert a day's attendance for one subject.

        Args:
            subject_id: Subject the sheet belongs to.
            on: Date of the sheet.
            marks: Present flag per student id.
            fill_absent: Also save every unmarked student as absent.

        Returns:
            All records of the sheet after saving.

        Raises:
            SubjectNotFoundError: If the subject does not exist.
            PolicyViolationError: If the caller may not write attendance.
        """
        self._require_subject(subject_id)

        present_by_student = dict(marks)
        if fill_absent:
            for (student_id,) in self.db.query(StudentModel.id).all():
                present_by_student.setdefault(student_id, False)

        existing = {r.student_id: r for r in self.list_records(subject_id=subject_id, on=on)}
        for student_id, present in present_by_student.items():
            record = existing.get(student_id)
            if record is None:
                self.db.add(
                    AttendanceModel(
                        date=on,
                        present=present,
                        student_id=student_id,
                        subject_id=subject_id,
                    )
                )
            else:
                record.present = present

        commit_or_rollback(self.db)
        logger.info(
            "Saved attendance sheet for subject %s on %s (%d students)",
            subject_id,
            on,
            len(present_by_student),
        )
        return self.list_records(subject_id=subject_id, on=on)
