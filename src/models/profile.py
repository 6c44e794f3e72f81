"""Profile database model."""

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.sql import func

from .base import Base


class ProfileModel(Base):
    """Public profile, one per account."""

    __tablename__ = "profiles"

    id = Column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    username = Column(String(50), unique=True, nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))
    email = Column(String(100))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
