"""Grade management utilities.

Only the two scores are ever written; the average is read back from the
database after each commit.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, contains_eager

from core.database import commit_or_rollback
from core.exceptions import GradeNotFoundError, SubjectNotFoundError
from models.grade import GradeModel
from models.student import StudentModel
from models.subject import SubjectModel

logger = logging.getLogger(__name__)


class GradeManager:
    """Manages grade rows and per-subject grade sheets."""

    def __init__(self, db: Session):
        self.db = db

    def list_grades(
        self, subject_id: Optional[str] = None, student_id: Optional[str] = None
    ) -> List[GradeModel]:
        """List grades with their student, ordered by the student's last name."""
        query = (
            self.db.query(GradeModel)
            .join(GradeModel.student)
            .options(contains_eager(GradeModel.student))
        )
        if subject_id:
            query = query.filter(GradeModel.subject_id == subject_id)
        if student_id:
            query = query.filter(GradeModel.student_id == student_id)
        return query.order_by(StudentModel.last_name.asc(), StudentModel.first_name.asc()).all()

    def get_grade(self, grade_id: str) -> GradeModel:
        model = self.db.query(GradeModel).filter(GradeModel.id == grade_id).first()
        if model is None:
            raise GradeNotFoundError(grade_id)
        return model

    def create_grade(self, data: Dict[str, Any]) -> GradeModel:
        """Insert a grade.

        Args:
            data: partial_score, exam_score, student_id and subject_id.

        Returns:
            The new GradeModel with its computed average loaded.

        Raises:
            sqlalchemy.exc.IntegrityError: If a score is out of range or the
                (student, subject) pair already has a grade.
        """
        model = GradeModel(**data)
        self.db.add(model)
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info(
            "Recorded grade for student %s in subject %s: average %s",
            model.student_id,
            model.subject_id,
            model.average,
        )
        return model

    def update_grade(self, grade_id: str, changes: Dict[str, Any]) -> GradeModel:
        model = self.get_grade(grade_id)
        for key in ("partial_score", "exam_score"):
            if changes.get(key) is not None:
                setattr(model, key, changes[key])
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info("Updated grade %s: average %s", grade_id, model.average)
        return model

    def delete_grade(self, grade_id: str) -> None:
        model = self.get_grade(grade_id)
        self.db.delete(model)
        commit_or_rollback(self.db)
        logger.info("Deleted grade %s", grade_id)

    def save_sheet(self, subject_id: str, entries: Iterable[Dict[str, Any]]) -> List[GradeModel]:
        """Upsert grades for one subject, keyed on student.

        Args:
            subject_id: Subject the grades belong to.
            entries: Dicts with student_id, partial_score and exam_score.

        Returns:
            Every grade of the subject after saving.

        Raises:
            SubjectNotFoundError: If the subject does not exist.
            PolicyViolationError: If the caller may not write grades.
            sqlalchemy.exc.IntegrityError: If any score is out of range; no
                grade of the sheet is saved in that case.
        """
        if self.db.query(SubjectModel.id).filter(SubjectModel.id == subject_id).first() is None:
            raise SubjectNotFoundError(subject_id)

        existing = {
            g.student_id: g
            for g in self.db.query(GradeModel).filter(GradeModel.subject_id == subject_id)
        }
        count = 0
        for entry in entries:
            grade = existing.get(entry["student_id"])
            if grade is None:
                grade = GradeModel(subject_id=subject_id, student_id=entry["student_id"])
                self.db.add(grade)
                existing[entry["student_id"]] = grade
            grade.partial_score = entry["partial_score"]
            grade.exam_score = entry["exam_score"]
            count += 1

        commit_or_rollback(self.db)
        logger.info("Saved grade sheet for subject %s (%d students)", subject_id, count)
        return self.list_grades(subject_id=subject_id)
