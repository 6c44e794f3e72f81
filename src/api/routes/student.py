"""Student routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.routes.auth import get_current_account
from core.dependencies import StudentManagerDep
from core.exceptions import StudentNotFoundError
from schemas.student import Student, StudentCreate, StudentUpdate

router = APIRouter(
    prefix="/api/students",
    tags=["Student"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=List[Student], summary="List students")
def list_students(
    student_manager: StudentManagerDep,
    search: Optional[str] = Query(
        default=None, description="Matches first name, last name or id number."
    ),
) -> List[Student]:
    return [Student.model_validate(m) for m in student_manager.list_students(search)]


@router.post("", response_model=Student, summary="Add a student")
def create_student(req: StudentCreate, student_manager: StudentManagerDep) -> Student:
    return Student.model_validate(student_manager.create_student(req.model_dump()))


@router.get("/{student_id}", response_model=Student, summary="Get a student")
def get_student(student_id: str, student_manager: StudentManagerDep) -> Student:
    try:
        return Student.model_validate(student_manager.get_student(student_id))
    except StudentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{student_id}", response_model=Student, summary="Update a student")
def update_student(
    student_id: str,
    req: StudentUpdate,
    student_manager: StudentManagerDep,
) -> Student:
    try:
        model = student_manager.update_student(
            student_id, req.model_dump(exclude_unset=True)
        )
    except StudentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Student.model_validate(model)


@router.delete("/{student_id}", summary="Delete a student")
def delete_student(student_id: str, student_manager: StudentManagerDep) -> dict:
    """Delete a student together with their attendance and grades."""
    try:
        student_manager.delete_student(student_id)
    except StudentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"success": True, "message": "Student deleted successfully"}
