"""Database models. Importing this package registers every table on Base."""

from .base import Base
from .account import AccountModel
from .profile import ProfileModel
from .user_role import AppRole, UserRoleModel
from .student import StudentModel
from .subject import SubjectModel
from .attendance import AttendanceModel
from .grade import GradeModel

__all__ = [
    "Base",
    "AccountModel",
    "ProfileModel",
    "AppRole",
    "UserRoleModel",
    "StudentModel",
    "SubjectModel",
    "AttendanceModel",
    "GradeModel",
]
