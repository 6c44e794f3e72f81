"""Account database model.

Accounts are owned by the authentication service. Creating one fires the
profile provisioning trigger (see ``core.triggers``).
"""

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.sql import func

from .base import Base, new_uuid


class AccountModel(Base):
    """Login identity; the ``id`` is the caller uid seen by policies."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    raw_user_meta_data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
