"""Student management utilities."""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from core.database import commit_or_rollback
from core.exceptions import StudentNotFoundError
from models.student import StudentModel

logger = logging.getLogger(__name__)


class StudentManager:
    """Manages student rows."""

    def __init__(self, db: Session):
        self.db = db

    def list_students(self, search: Optional[str] = None) -> List[StudentModel]:
        """List students ordered by last name.

        Args:
            search: Optional case-insensitive substring matched against first
                name, last name and id number.

        Returns:
            Matching StudentModel rows.
        """
        query = self.db.query(StudentModel)
        term = (search or "").strip()
        if term:
            query = query.filter(
                or_(
                    StudentModel.first_name.icontains(term, autoescape=True),
                    StudentModel.last_name.icontains(term, autoescape=True),
                    StudentModel.id_number.icontains(term, autoescape=True),
                )
            )
        return query.order_by(
            StudentModel.last_name.asc(), StudentModel.first_name.asc()
        ).all()

    def get_student(self, student_id: str) -> StudentModel:
        model = self.db.query(StudentModel).filter(StudentModel.id == student_id).first()
        if model is None:
            raise StudentNotFoundError(student_id)
        return model

    def create_student(self, data: Dict[str, Any]) -> StudentModel:
        model = StudentModel(**data)
        self.db.add(model)
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info("Created student %s (%s)", model.id, model.id_number)
        return model

    def update_student(self, student_id: str, changes: Dict[str, Any]) -> StudentModel:
        model = self.get_student(student_id)
        for key, value in changes.items():
            if value is not None:
                setattr(model, key, value)
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info("Updated student %s", student_id)
        return model

    def delete_student(self, student_id: str) -> None:
        """Delete a student; attendance and grades go with it (ON DELETE CASCADE)."""
        model = self.get_student(student_id)
        self.db.delete(model)
        commit_or_rollback(self.db)
        logger.info("Deleted student %s", student_id)
