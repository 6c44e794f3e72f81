"""Subject management utilities."""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from core.database import commit_or_rollback
from core.exceptions import SubjectNotFoundError
from models.subject import SubjectModel

logger = logging.getLogger(__name__)


class SubjectManager:
    def __init__(self, db: Session):
        self.db = db

    def list_subjects(self) -> List[SubjectModel]:
        return self.db.query(SubjectModel).order_by(SubjectModel.name.asc()).all()

    def get_subject(self, subject_id: str) -> SubjectModel:
        model = self.db.query(SubjectModel).filter(SubjectModel.id == subject_id).first()
        if model is None:
            raise SubjectNotFoundError(subject_id)
        return model

    def create_subject(self, data: Dict[str, Any]) -> SubjectModel:
        model = SubjectModel(**data)
        self.db.add(model)
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info("Created subject %s (%s)", model.id, model.name)
        return model

    def update_subject(self, subject_id: str, changes: Dict[str, Any]) -> SubjectModel:
        model = self.get_subject(subject_id)
        for key, value in changes.items():
            if value is not None:
                setattr(model, key, value)
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info("Updated subject %s", subject_id)
        return model

    def delete_subject(self, subject_id: str) -> None:
        model = self.get_subject(subject_id)
        self.db.delete(model)
        commit_or_rollback(self.db)
        logger.info("Deleted subject %s", subject_id)
