from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base, new_uuid


class StudentModel(Base):
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=new_uuid)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    id_number = Column(String(20), unique=True, nullable=False)
    email = Column(String(100), nullable=False)
    course = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Dependent rows are removed by ON DELETE CASCADE in the database.
    attendance = relationship(
        "AttendanceModel", back_populates="student", passive_deletes="all"
    )
    grades = relationship("GradeModel", back_populates="student", passive_deletes="all")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
