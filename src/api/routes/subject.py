"""Subject routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_account
from core.dependencies import SubjectManagerDep
from core.exceptions import SubjectNotFoundError
from schemas.subject import Subject, SubjectCreate, SubjectUpdate

router = APIRouter(
    prefix="/api/subjects",
    tags=["Subject"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=List[Subject], summary="List subjects")
def list_subjects(subject_manager: SubjectManagerDep) -> List[Subject]:
    return [Subject.model_validate(m) for m in subject_manager.list_subjects()]


@router.post("", response_model=Subject, summary="Add a subject")
def create_subject(req: SubjectCreate, subject_manager: SubjectManagerDep) -> Subject:
    return Subject.model_validate(subject_manager.create_subject(req.model_dump()))


@router.get("/{subject_id}", response_model=Subject, summary="Get a subject")
def get_subject(subject_id: str, subject_manager: SubjectManagerDep) -> Subject:
    try:
        return Subject.model_validate(subject_manager.get_subject(subject_id))
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{subject_id}", response_model=Subject, summary="Update a subject")
def update_subject(
    subject_id: str,
    req: SubjectUpdate,
    subject_manager: SubjectManagerDep,
) -> Subject:
    try:
        model = subject_manager.update_subject(
            subject_id, req.model_dump(exclude_unset=True)
        )
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Subject.model_validate(model)


@router.delete("/{subject_id}", summary="Delete a subject")
def delete_subject(subject_id: str, subject_manager: SubjectManagerDep) -> dict:
    try:
        subject_manager.delete_subject(subject_id)
    except SubjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"success": True, "message": "Subject deleted successfully"}
