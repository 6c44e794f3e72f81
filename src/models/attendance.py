from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    false,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base, new_uuid


class AttendanceModel(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint(
            "date",
            "student_id",
            "subject_id",
            name="uq_attendance_date_student_subject",
        ),
    )

    id = Column(String(36), primary_key=True, default=new_uuid)
    date = Column(Date, nullable=False)
    present = Column(Boolean, nullable=False, default=False, server_default=false())
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

    student = relationship("StudentModel", back_populates="attendance")
    subject = relationship("SubjectModel", back_populates="attendance")
