"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes,
following Google Python Style Guide and FastAPI best practices. Every manager
gets the request-scoped session; the authentication dependency binds the
caller to that same session, so row-level security applies to everything the
managers do.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from utils import account_manager
from utils import attendance_manager
from utils import grade_manager
from utils import profile_manager
from utils import report_manager
from utils import role_manager
from utils import student_manager
from utils import subject_manager


def get_account_manager(db: Session = Depends(get_db)) -> account_manager.AccountManager:
    """Get AccountManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        AccountManager instance.
    """
    return account_manager.AccountManager(db)


def get_profile_manager(db: Session = Depends(get_db)) -> profile_manager.ProfileManager:
    """Get ProfileManager instance with request-scoped DB session."""
    return profile_manager.ProfileManager(db)


def get_role_manager(db: Session = Depends(get_db)) -> role_manager.RoleManager:
    """Get RoleManager instance with request-scoped DB session."""
    return role_manager.RoleManager(db)


def get_student_manager(db: Session = Depends(get_db)) -> student_manager.StudentManager:
    """Get StudentManager instance with request-scoped DB session."""
    return student_manager.StudentManager(db)


def get_subject_manager(db: Session = Depends(get_db)) -> subject_manager.SubjectManager:
    """Get SubjectManager instance with request-scoped DB session."""
    return subject_manager.SubjectManager(db)


def get_attendance_manager(
    db: Session = Depends(get_db),
) -> attendance_manager.AttendanceManager:
    """Get AttendanceManager instance with request-scoped DB session."""
    return attendance_manager.AttendanceManager(db)


def get_grade_manager(db: Session = Depends(get_db)) -> grade_manager.GradeManager:
    """Get GradeManager instance with request-scoped DB session."""
    return grade_manager.GradeManager(db)


def get_report_manager(db: Session = Depends(get_db)) -> report_manager.ReportManager:
    """Get ReportManager instance with request-scoped DB session."""
    return report_manager.ReportManager(db)


# Type aliases for dependency injection
AccountManagerDep = Annotated[
    account_manager.AccountManager, Depends(get_account_manager)
]
ProfileManagerDep = Annotated[
    profile_manager.ProfileManager, Depends(get_profile_manager)
]
RoleManagerDep = Annotated[role_manager.RoleManager, Depends(get_role_manager)]
StudentManagerDep = Annotated[
    student_manager.StudentManager, Depends(get_student_manager)
]
SubjectManagerDep = Annotated[
    subject_manager.SubjectManager, Depends(get_subject_manager)
]
AttendanceManagerDep = Annotated[
    attendance_manager.AttendanceManager, Depends(get_attendance_manager)
]
GradeManagerDep = Annotated[grade_manager.GradeManager, Depends(get_grade_manager)]
ReportManagerDep = Annotated[report_manager.ReportManager, Depends(get_report_manager)]
