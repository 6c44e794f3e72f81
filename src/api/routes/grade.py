"""Grade routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_account
from core.dependencies import GradeManagerDep
from core.exceptions import GradeNotFoundError, SubjectNotFoundError
from schemas.grade import Grade, GradeCreate, GradeUpdate, SaveGradeSheetRequest

router = APIRouter(
    prefix="/api/grades",
    tags=["Grade"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=List[Grade], summary="List grades")
def list_grades(
    grade_manager: GradeManagerDep,
    subject_id: Optional[str] = None,
    student_id: Optional[str] = None,
) -> List[Grade]:
    grades = grade_manager.list_grades(subject_id=subject_id, student_id=student_id)
    return [Grade.model_validate(g) for g in grades]


@router.post("", response_model=Grade, summary="Record a grade")
def create_grade(req: GradeCreate, grade_manager: GradeManagerDep) -> Grade:
    """Record a grade. The average is computed by the database."""
    return Grade.model_validate(grade_manager.create_grade(req.model_dump()))


@router.put("/sheet", response_model=List[Grade], summary="Save grade sheet")
def save_sheet(req: SaveGradeSheetRequest, grade_manager: GradeManagerDep) -> List[Grade]:
    try:
        grades = grade_manager.save_sheet(
            req.subject_id, [entry.model_dump() for entry in req.grades]
        )
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [Grade.model_validate(g) for g in grades]


@router.get("/{grade_id}", response_model=Grade, summary="Get a grade")
def get_grade(grade_id: str, grade_manager: GradeManagerDep) -> Grade:
    try:
        return Grade.model_validate(grade_manager.get_grade(grade_id))
    except GradeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{grade_id}", response_model=Grade, summary="Update scores")
def update_grade(grade_id: str, req: GradeUpdate, grade_manager: GradeManagerDep) -> Grade:
    try:
        model = grade_manager.update_grade(grade_id, req.model_dump(exclude_unset=True))
    except GradeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Grade.model_validate(model)


@router.delete("/{grade_id}", summary="Delete a grade")
def delete_grade(grade_id: str, grade_manager: GradeManagerDep) -> dict:
    try:
        grade_manager.delete_grade(grade_id)
    except GradeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"success": True, "message": "Grade deleted successfully"}
