"""Role assignment utilities."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.database import commit_or_rollback
from core.exceptions import RoleAssignmentNotFoundError
from models.user_role import AppRole, UserRoleModel

logger = logging.getLogger(__name__)


class RoleManager:
    """Manages role assignments. Writes are limited to admins by policy."""

    def __init__(self, db: Session):
        self.db = db

    def list_assignments(self, user_id: Optional[str] = None) -> List[UserRoleModel]:
        query = self.db.query(UserRoleModel)
        if user_id:
            query = query.filter(UserRoleModel.user_id == user_id)
        return query.order_by(UserRoleModel.created_at.asc()).all()

    def role_names(self, user_id: str) -> List[str]:
        return sorted(a.role.value for a in self.list_assignments(user_id))

    def grant_role(self, user_id: str, role) -> UserRoleModel:
        """Assign a role to an account.

        Args:
            user_id: Account receiving the role.
            role: An ``AppRole`` or its string value.

        Returns:
            The new UserRoleModel.

        Raises:
            PolicyViolationError: If the caller is not an admin.
            sqlalchemy.exc.IntegrityError: If the account already holds the role.
        """
        model = UserRoleModel(user_id=user_id, role=AppRole(role))
        self.db.add(model)
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info("Granted role %s to %s", model.role.value, user_id)
        return model

    def revoke_role(self, assignment_id: str) -> None:
        model = (
            self.db.query(UserRoleModel)
            .filter(UserRoleModel.id == assignment_id)
            .first()
        )
        if model is None:
            raise RoleAssignmentNotFoundError(assignment_id)
        role, user_id = model.role.value, model.user_id
        self.db.delete(model)
        commit_or_rollback(self.db)
        logger.info("Revoked role %s from %s", role, user_id)
