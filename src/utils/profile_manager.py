"""Profile management utilities."""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from core.database import commit_or_rollback
from core.exceptions import ProfileNotFoundError
from models.profile import ProfileModel

logger = logging.getLogger(__name__)


class ProfileManager:
    """Reads and updates profiles. Profiles are never created here."""

    def __init__(self, db: Session):
        self.db = db

    def list_profiles(self) -> List[ProfileModel]:
        return self.db.query(ProfileModel).order_by(ProfileModel.username.asc()).all()

    def get_profile(self, profile_id: str) -> ProfileModel:
        model = self.db.query(ProfileModel).filter(ProfileModel.id == profile_id).first()
        if model is None:
            raise ProfileNotFoundError(profile_id)
        return model

    def update_profile(self, profile_id: str, changes: Dict[str, Any]) -> ProfileModel:
        """Apply a partial update to a profile.

        Args:
            profile_id: Profile to update.
            changes: Field values to set; None values are ignored.

        Returns:
            The updated ProfileModel.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            PolicyViolationError: If the caller does not own the profile.
        """
        model = self.get_profile(profile_id)
        for key, value in changes.items():
            if value is not None:
                setattr(model, key, value)
        commit_or_rollback(self.db)
        self.db.refresh(model)
        logger.info("Updated profile: %s", profile_id)
        return model
