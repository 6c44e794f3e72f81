"""Role assignment routes.

Listing is filtered by policy (own roles, or all for admins); granting and
revoking are admin-only.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_account
from core.dependencies import RoleManagerDep
from core.exceptions import RoleAssignmentNotFoundError
from schemas.role import GrantRoleRequest, RoleAssignment

router = APIRouter(
    prefix="/api/roles",
    tags=["Role"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=List[RoleAssignment], summary="List role assignments")
def list_roles(
    role_manager: RoleManagerDep,
    user_id: Optional[str] = None,
) -> List[RoleAssignment]:
    return [
        RoleAssignment.model_validate(m)
        for m in role_manager.list_assignments(user_id=user_id)
    ]


@router.post("", response_model=RoleAssignment, summary="Grant a role")
def grant_role(req: GrantRoleRequest, role_manager: RoleManagerDep) -> RoleAssignment:
    return RoleAssignment.model_validate(role_manager.grant_role(req.user_id, req.role))


@router.delete("/{assignment_id}", summary="Revoke a role")
def revoke_role(assignment_id: str, role_manager: RoleManagerDep) -> dict:
    try:
        role_manager.revoke_role(assignment_id)
    except RoleAssignmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"success": True, "message": "Role revoked successfully"}
