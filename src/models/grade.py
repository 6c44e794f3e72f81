"""Grade database model.

``average`` is a stored generated column: the database recomputes it whenever
either score changes, and it is never written by the application.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Computed,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base, new_uuid


class GradeModel(Base):
    __tablename__ = "grades"
    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", name="uq_grades_student_subject"),
        CheckConstraint(
            "partial_score >= 0 AND partial_score <= 100",
            name="ck_grades_partial_score_range",
        ),
        CheckConstraint(
            "exam_score >= 0 AND exam_score <= 100",
            name="ck_grades_exam_score_range",
        ),
    )

    id = Column(String(36), primary_key=True, default=new_uuid)
    partial_score = Column(Numeric(5, 2), nullable=False)
    exam_score = Column(Numeric(5, 2), nullable=False)
    # 2.0 keeps the division fractional on SQLite, where scores may be stored as integers
    average = Column(
        Numeric(5, 2), Computed("(partial_score + exam_score) / 2.0", persisted=True)
    )
    student_id = Column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    subject_id = Column(
        String(36),
        ForeignKey("subjects.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    student = relationship("StudentModel", back_populates="grades")
    subject = relationship("SubjectModel", back_populates="grades")
