"""Dashboard statistics and per-subject reports."""

import logging
from collections import Counter, OrderedDict
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from core.exceptions import SubjectNotFoundError
from models.attendance import AttendanceModel
from models.grade import GradeModel
from models.student import StudentModel
from models.subject import SubjectModel
from utils.standing import grade_bands, grade_standing, performance_label

logger = logging.getLogger(__name__)


def _percent(present: int, total: int) -> float:
    return present / total * 100 if total else 0.0


def _rate(present: int, total: int) -> float:
    return round(_percent(present, total), 2)


def report_row(student: StudentModel, present: int, total: int, average: float) -> Dict:
    """One report line. The label is decided on the unrounded attendance rate."""
    return {
        "student_id": student.id,
        "student_name": student.full_name,
        "id_number": student.id_number,
        "attendance_rate": _rate(present, total),
        "average_grade": round(average, 2),
        "performance": performance_label(average, _percent(present, total)),
    }


class ReportManager:
    """Read-only aggregates over students, subjects, attendance and grades."""

    def __init__(self, db: Session):
        self.db = db

    def dashboard(self) -> Dict:
        """Overview numbers for the dashboard.

        Returns:
            Dict with total_students, total_subjects, average_grade (mean of
            every grade average), attendance_rate (% present over all
            records), grade_distribution (count per standing band) and
            attendance_trend (rate per "YYYY-MM", oldest first).
        """
        total_students = self.db.query(func.count(StudentModel.id)).scalar() or 0
        total_subjects = self.db.query(func.count(SubjectModel.id)).scalar() or 0

        averages = [
            float(avg)
            for (avg,) in self.db.query(GradeModel.average).all()
            if avg is not None
        ]
        average_grade = round(sum(averages) / len(averages), 2) if averages else 0.0

        bands = Counter(grade_standing(avg) for avg in averages)
        distribution = [{"band": band, "count": bands.get(band, 0)} for band in grade_bands()]

        records = self.db.query(AttendanceModel.date, AttendanceModel.present).all()
        present_total = sum(1 for _, present in records if present)

        by_month: "OrderedDict[str, List[int]]" = OrderedDict()
        for day, present in sorted(records, key=lambda r: r[0]):
            counts = by_month.setdefault(day.strftime("%Y-%m"), [0, 0])
            counts[0] += 1 if present else 0
            counts[1] += 1
        trend = [
            {"month": month, "rate": _rate(present, total)}
            for month, (present, total) in by_month.items()
        ]

        return {
            "total_students": total_students,
            "total_subjects": total_subjects,
            "average_grade": average_grade,
            "attendance_rate": _rate(present_total, len(records)),
            "grade_distribution": distribution,
            "attendance_trend": trend,
        }

    def subject_report(self, subject_id: str) -> Dict:
        """Attendance rate, grade average and performance label per student.

        Students with no attendance records get a rate of 0; students with no
        grade get an average of 0.

        Raises:
            SubjectNotFoundError: If the subject does not exist.
        """
        subject = self.db.query(SubjectModel).filter(SubjectModel.id == subject_id).first()
        if subject is None:
            raise SubjectNotFoundError(subject_id)

        attendance: Dict[str, List[int]] = {}
        for student_id, present in self.db.query(
            AttendanceModel.student_id, AttendanceModel.present
        ).filter(AttendanceModel.subject_id == subject_id):
            counts = attendance.setdefault(student_id, [0, 0])
            counts[0] += 1 if present else 0
            counts[1] += 1

        averages = {
            student_id: float(avg) if avg is not None else 0.0
            for student_id, avg in self.db.query(
                GradeModel.student_id, GradeModel.average
            ).filter(GradeModel.subject_id == subject_id)
        }

        rows = []
        students = (
            self.db.query(StudentModel)
            .order_by(StudentModel.last_name.asc(), StudentModel.first_name.asc())
            .all()
        )
        for student in students:
            present, total = attendance.get(student.id, (0, 0))
            rows.append(report_row(student, present, total, averages.get(student.id, 0.0)))

        logger.debug("Built report for subject %s (%d rows)", subject_id, len(rows))
        return {"subject_id": subject.id, "subject_name": subject.name, "rows": rows}
