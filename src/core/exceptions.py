"""Custom exception classes for EduTrack.

This module defines application-specific exceptions following Google Python
Style Guide.
"""


class EduTrackError(Exception):
    """Base exception for all EduTrack errors."""

    pass


class RecordNotFoundError(EduTrackError):
    """Raised when a requested row cannot be found or is not visible."""

    entity = "Record"

    def __init__(self, record_id: str):
        """Initialize the exception.

        Args:
            record_id: The ID of the row that was not found.
        """
        self.record_id = record_id
        super().__init__(f"{self.entity} '{record_id}' not found")


class StudentNotFoundError(RecordNotFoundError):
    entity = "Student"


class SubjectNotFoundError(RecordNotFoundError):
    entity = "Subject"


class AttendanceNotFoundError(RecordNotFoundError):
    entity = "Attendance record"


class GradeNotFoundError(RecordNotFoundError):
    entity = "Grade"


class ProfileNotFoundError(RecordNotFoundError):
    entity = "Profile"


class RoleAssignmentNotFoundError(RecordNotFoundError):
    entity = "Role assignment"


class PolicyViolationError(EduTrackError):
    """Raised when a row-level security policy rejects a write."""

    def __init__(self, table: str, action: str):
        """Initialize the exception.

        Args:
            table: Name of the table the statement targeted.
            action: One of 'insert', 'update' or 'delete'.
        """
        self.table = table
        self.action = action
        if action == "insert":
            message = f'new row violates row-level security policy for table "{table}"'
        else:
            message = (
                f'row-level security policy for table "{table}" '
                f"does not permit {action}"
            )
        super().__init__(message)
