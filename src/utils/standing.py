"""Grade standing and report performance labels."""

from config import (
    GRADE_STANDING_BANDS,
    GRADE_STANDING_FALLBACK,
    PERFORMANCE_ATTENTION_FLOOR,
    PERFORMANCE_EXCELLENT,
    PERFORMANCE_GOOD,
)


def grade_standing(average: float) -> str:
    """Label for a grade average: Excellent, Good, Average or Below Average."""
    for band, floor in GRADE_STANDING_BANDS.items():
        if average >= floor:
            return band
    return GRADE_STANDING_FALLBACK


def performance_label(average_grade: float, attendance_rate: float) -> str:
    """Label for a student's standing in one subject.

    Args:
        average_grade: Grade average for the subject (0-100).
        attendance_rate: Attendance percentage for the subject (0-100).

    Returns:
        "Excellent", "Good", "Needs Attention" or "Average".
    """
    if average_grade >= PERFORMANCE_EXCELLENT[0] and attendance_rate >= PERFORMANCE_EXCELLENT[1]:
        return "Excellent"
    if average_grade >= PERFORMANCE_GOOD[0] and attendance_rate >= PERFORMANCE_GOOD[1]:
        return "Good"
    if average_grade < PERFORMANCE_ATTENTION_FLOOR or attendance_rate < PERFORMANCE_ATTENTION_FLOOR:
        return "Needs Attention"
    return "Average"


def grade_bands():
    """Every band label, best first."""
    return list(GRADE_STANDING_BANDS) + [GRADE_STANDING_FALLBACK]
