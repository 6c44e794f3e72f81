"""Declarative base shared by all database models."""

import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_uuid() -> str:
    """Default primary key for every table: a random UUID string."""
    return str(uuid.uuid4())
