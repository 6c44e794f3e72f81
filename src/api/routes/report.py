"""Dashboard and report routes."""

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_account
from core.dependencies import ReportManagerDep
from core.exceptions import SubjectNotFoundError
from schemas.report import DashboardStats, SubjectReport

router = APIRouter(
    prefix="/api",
    tags=["Report"],
    dependencies=[Depends(get_current_account)],
)


@router.get("/dashboard", response_model=DashboardStats, summary="Dashboard overview")
def dashboard(report_manager: ReportManagerDep) -> DashboardStats:
    return DashboardStats(**report_manager.dashboard())


@router.get("/reports", response_model=SubjectReport, summary="Subject performance report")
def subject_report(subject_id: str, report_manager: ReportManagerDep) -> SubjectReport:
    """Attendance rate, grade average and performance label per student."""
    try:
        return SubjectReport(**report_manager.subject_report(subject_id))
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
