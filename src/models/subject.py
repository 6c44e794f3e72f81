from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base, new_uuid


class SubjectModel(Base):
    __tablename__ = "subjects"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(100), nullable=False)
    instructor = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    attendance = relationship(
        "AttendanceModel", back_populates="subject", passive_deletes="all"
    )
    grades = relationship("GradeModel", back_populates="subject", passive_deletes="all")
