"""Row-level security for SQLAlchemy sessions.

Every session carries the caller's account id in ``session.info["uid"]``.
Two session-wide listeners enforce the per-table policies for that caller:

- ``do_orm_execute`` adds row filters to every ORM SELECT (lazy loads
  included) and rejects ORM INSERT, UPDATE and DELETE statements the caller
  may not issue.
- ``before_flush`` checks each pending INSERT, UPDATE and DELETE and raises
  ``PolicyViolationError`` before anything reaches the database, so a
  rejected unit of work is never partially applied.

The legacy ``bulk_*`` session methods write without a flush or an ORM
statement, so ``PolicySession`` checks them itself. Sessions must be created
with ``class_=PolicySession`` (``core.database.SessionLocal`` is).

Policy lookups read ``user_roles`` on the session's connection directly,
which bypasses the ORM listeners the same way a security-definer function
bypasses the policies that call it.
"""

import logging
from contextlib import contextmanager
from typing import Dict, FrozenSet, Iterator, Optional

from sqlalchemy import event, false, inspect, select
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session, with_loader_criteria

from core.exceptions import PolicyViolationError
from models import (
    AppRole,
    AttendanceModel,
    GradeModel,
    ProfileModel,
    StudentModel,
    SubjectModel,
    UserRoleModel,
)

logger = logging.getLogger(__name__)

UID_KEY = "uid"
BYPASS_KEY = "rls_bypass"

STAFF_ROLES: FrozenSet[AppRole] = frozenset({AppRole.ADMIN, AppRole.TEACHER})

_user_roles = UserRoleModel.__table__


def has_role(connection: Connection, user_id: Optional[str], role) -> bool:
    """Check whether an account holds a role.

    Args:
        connection: Connection to run the lookup on.
        user_id: Account id, or None for an anonymous caller.
        role: An ``AppRole`` or its string value.

    Returns:
        True if a matching role assignment exists.
    """
    if user_id is None:
        return False
    stmt = (
        select(_user_roles.c.id)
        .where(_user_roles.c.user_id == user_id, _user_roles.c.role == AppRole(role))
        .limit(1)
    )
    return connection.execute(stmt).first() is not None


def roles_of(connection: Connection, user_id: Optional[str]) -> FrozenSet[AppRole]:
    """Return every role assigned to an account."""
    if user_id is None:
        return frozenset()
    stmt = select(_user_roles.c.role).where(_user_roles.c.user_id == user_id)
    return frozenset(AppRole(role) for role in connection.execute(stmt).scalars())


class Caller:
    """Identity of the session's caller, with roles looked up on demand."""

    def __init__(self, session: Session):
        self.uid: Optional[str] = session.info.get(UID_KEY)
        self._session = session
        self._roles: Optional[FrozenSet[AppRole]] = None

    @property
    def authenticated(self) -> bool:
        return self.uid is not None

    @property
    def roles(self) -> FrozenSet[AppRole]:
        if self._roles is None:
            self._roles = roles_of(self._session.connection(), self.uid)
        return self._roles

    @property
    def is_admin(self) -> bool:
        return AppRole.ADMIN in self.roles

    @property
    def is_staff(self) -> bool:
        return bool(self.roles & STAFF_ROLES)


class TablePolicy:
    """Authorization rules for one table."""

    def read_criteria(self, model, caller: Caller):
        """Row filter for SELECT, or None when every row is visible."""
        return None

    def allows(self, caller: Caller, action: str, obj=None) -> bool:
        """Whether the caller may apply ``action`` to ``obj``.

        ``obj`` is None for bulk statements, where no single row is known.
        """
        return False


class StaffManagedPolicy(TablePolicy):
    """Any authenticated caller reads; admins and teachers write."""

    def allows(self, caller: Caller, action: str, obj=None) -> bool:
        return caller.is_staff


class ProfilePolicy(TablePolicy):
    """Every profile is readable; callers update only their own.

    Profiles are inserted by the provisioning trigger alone.
    """

    def allows(self, caller: Caller, action: str, obj=None) -> bool:
        return action == "update" and obj is not None and obj.id == caller.uid


class RoleAssignmentPolicy(TablePolicy):
    """Callers see their own roles; admins see and manage all of them."""

    def read_criteria(self, model, caller: Caller):
        if caller.is_admin:
            return None
        return model.user_id == caller.uid

    def allows(self, caller: Caller, action: str, obj=None) -> bool:
        return caller.is_admin


POLICIES: Dict[type, TablePolicy] = {
    ProfileModel: ProfilePolicy(),
    UserRoleModel: RoleAssignmentPolicy(),
    StudentModel: StaffManagedPolicy(),
    SubjectModel: StaffManagedPolicy(),
    AttendanceModel: StaffManagedPolicy(),
    GradeModel: StaffManagedPolicy(),
}


def bind_caller(session: Session, uid: Optional[str]) -> Session:
    """Attach the caller's account id to a session."""
    session.info[UID_KEY] = uid
    return session


@contextmanager
def elevated(session: Session) -> Iterator[Session]:
    """Run a block with row-level security switched off for the session."""
    previous = session.info.get(BYPASS_KEY, False)
    session.info[BYPASS_KEY] = True
    try:
        yield session
    finally:
        session.info[BYPASS_KEY] = previous


def _bypassed(session: Session) -> bool:
    return bool(session.info.get(BYPASS_KEY))


def _deny(caller: Caller, table: str, action: str) -> None:
    logger.warning(
        "Row-level security denied %s on %s for caller %s",
        action,
        table,
        caller.uid or "<anonymous>",
    )
    raise PolicyViolationError(table, action)


def authorize(session: Session, model, action: str, obj=None) -> None:
    """Check one write against the policy of ``model``'s table.

    Args:
        session: Session carrying the caller.
        model: Mapped class being written.
        action: One of 'insert', 'update' or 'delete'.
        obj: The row, when a single row is known.

    Raises:
        PolicyViolationError: If the caller may not apply ``action``.
    """
    if _bypassed(session):
        return
    policy = POLICIES.get(model)
    if policy is None:
        return
    caller = Caller(session)
    if not caller.authenticated or not policy.allows(caller, action, obj):
        _deny(caller, model.__tablename__, action)


class PolicySession(Session):
    """Session whose legacy bulk writes go through the table policies."""

    def bulk_save_objects(self, objects, *args, **kwargs):
        objects = list(objects)
        for obj in objects:
            action = "insert" if inspect(obj).key is None else "update"
            authorize(self, type(obj), action, obj)
        return super().bulk_save_objects(objects, *args, **kwargs)

    def bulk_insert_mappings(self, mapper, mappings, *args, **kwargs):
        authorize(self, inspect(mapper).class_, "insert")
        return super().bulk_insert_mappings(mapper, mappings, *args, **kwargs)

    def bulk_update_mappings(self, mapper, mappings):
        authorize(self, inspect(mapper).class_, "update")
        return super().bulk_update_mappings(mapper, mappings)


@event.listens_for(Session, "do_orm_execute")
def _apply_row_policies(execute_state) -> None:
    session = execute_state.session
    if _bypassed(session):
        return

    caller = Caller(session)

    if (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.is_relationship_load
    ):
        options = []
        for model, policy in POLICIES.items():
            if not caller.authenticated:
                criteria = false()
            else:
                criteria = policy.read_criteria(model, caller)
            if criteria is not None:
                options.append(with_loader_criteria(model, criteria, include_aliases=True))
        if options:
            execute_state.statement = execute_state.statement.options(*options)
        return

    if execute_state.is_insert:
        action = "insert"
    elif execute_state.is_update:
        action = "update"
    elif execute_state.is_delete:
        action = "delete"
    else:
        return
    mapper = execute_state.bind_mapper
    policy = POLICIES.get(mapper.class_) if mapper is not None else None
    if policy is None:
        return
    if not caller.authenticated or not policy.allows(caller, action):
        _deny(caller, mapper.local_table.name, action)


@event.listens_for(Session, "before_flush")
def _check_write_policies(session, flush_context, instances) -> None:
    if _bypassed(session):
        return

    caller = Caller(session)
    pending = (
        ("insert", list(session.new)),
        ("update", [obj for obj in session.dirty if session.is_modified(obj)]),
        ("delete", list(session.deleted)),
    )
    for action, objects in pending:
        for obj in objects:
            policy = POLICIES.get(type(obj))
            if policy is None:
                continue
            if not caller.authenticated or not policy.allows(caller, action, obj):
                _deny(caller, obj.__tablename__, action)
