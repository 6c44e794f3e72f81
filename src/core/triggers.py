"""Storage-side triggers.

``updated_at`` columns are refreshed by ``onupdate`` on the models. The only
trigger that needs code is profile provisioning: when an account row is
inserted, exactly one profile row is inserted on the same connection. The
insert is issued below the ORM, so it is not subject to the profile write
policy.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import event

from models import AccountModel, ProfileModel

logger = logging.getLogger(__name__)


def derive_username(email: str, metadata: Optional[Dict[str, Any]]) -> str:
    """Username from sign-up metadata, else the local part of the email."""
    username = (metadata or {}).get("username")
    if username:
        return username
    return email.split("@", 1)[0]


@event.listens_for(AccountModel, "after_insert")
def handle_new_account(mapper, connection, target: AccountModel) -> None:
    metadata = target.raw_user_meta_data or {}
    username = derive_username(target.email, metadata)
    connection.execute(
        ProfileModel.__table__.insert().values(
            id=target.id,
            username=username,
            first_name=metadata.get("first_name"),
            last_name=metadata.get("last_name"),
            email=target.email,
        )
    )
    logger.info("Provisioned profile '%s' for account %s", username, target.id)
