"""Row-level security enforced by the session listeners."""

import pytest
from sqlalchemy import insert

from core.exceptions import PolicyViolationError
from core.policies import elevated, has_role
from models import AppRole, ProfileModel, StudentModel, SubjectModel, UserRoleModel


def _student(id_number="2024-001"):
    return StudentModel(
        first_name="Ana",
        last_name="Reyes",
        id_number=id_number,
        email="ana@school.edu",
        course="BSCS",
    )


def test_has_role(session_factory, make_account):
    teacher_id = make_account("t@school.edu", role="teacher")

    with session_factory() as db:
        conn = db.connection()
        assert has_role(conn, teacher_id, AppRole.TEACHER)
        assert has_role(conn, teacher_id, "teacher")
        assert not has_role(conn, teacher_id, AppRole.ADMIN)
        assert not has_role(conn, None, AppRole.TEACHER)


def test_student_role_cannot_insert_student(session_for, make_account):
    pupil_id = make_account("pupil@school.edu", role="student")
    db = session_for(pupil_id)

    db.add(_student())
    with pytest.raises(PolicyViolationError) as exc_info:
        db.commit()
    db.rollback()

    assert 'row-level security policy for table "students"' in str(exc_info.value)
    with elevated(db):
        assert db.query(StudentModel).count() == 0


def test_account_without_role_cannot_insert_subject(session_for, make_account):
    db = session_for(make_account("nobody@school.edu"))

    db.add(SubjectModel(name="Algebra", instructor="Mr. Cruz"))
    with pytest.raises(PolicyViolationError):
        db.commit()


@pytest.mark.parametrize("role", ["admin", "teacher"])
def test_staff_can_write_students(session_for, make_account, role):
    db = session_for(make_account(f"{role}@school.edu", role=role))

    student = _student()
    db.add(student)
    db.commit()
    student.course = "BSIT"
    db.commit()
    db.delete(student)
    db.commit()

    assert db.query(StudentModel).count() == 0


def test_rejected_flush_writes_nothing(session_for, make_account):
    db = session_for(make_account("pupil@school.edu", role="student"))

    db.add_all([_student("A-1"), _student("A-2"), SubjectModel(name="Algebra", instructor="X")])
    with pytest.raises(PolicyViolationError):
        db.commit()
    db.rollback()

    with elevated(db):
        assert db.query(StudentModel).count() == 0
        assert db.query(SubjectModel).count() == 0


def test_any_authenticated_caller_reads_students(session_for, make_account):
    teacher = session_for(make_account("t@school.edu", role="teacher"))
    teacher.add(_student())
    teacher.commit()

    assert session_for(make_account("pupil@school.edu", role="student")).query(StudentModel).count() == 1
    assert session_for(make_account("norole@school.edu")).query(StudentModel).count() == 1


def test_anonymous_session_sees_nothing(session_for, make_account):
    teacher = session_for(make_account("t@school.edu", role="teacher"))
    teacher.add(_student())
    teacher.commit()

    anonymous = session_for(None)
    assert anonymous.query(StudentModel).all() == []
    assert anonymous.query(ProfileModel).all() == []


def test_bulk_update_is_checked(session_for, make_account):
    teacher = session_for(make_account("t@school.edu", role="teacher"))
    teacher.add(_student())
    teacher.commit()

    pupil = session_for(make_account("pupil@school.edu", role="student"))
    with pytest.raises(PolicyViolationError):
        pupil.query(StudentModel).update({StudentModel.course: "Hacked"})
    pupil.rollback()

    assert teacher.query(StudentModel.course).scalar() == "BSCS"


def test_insert_statement_is_checked(session_for, make_account):
    pupil = session_for(make_account("pupil@school.edu", role="student"))

    with pytest.raises(PolicyViolationError):
        pupil.execute(insert(SubjectModel), [{"name": "Algebra", "instructor": "X"}])
    pupil.rollback()

    with elevated(pupil):
        assert pupil.query(SubjectModel).count() == 0


def test_insert_statement_allowed_for_staff(session_for, make_account):
    teacher = session_for(make_account("t@school.edu", role="teacher"))

    teacher.execute(insert(SubjectModel), [{"name": "Algebra", "instructor": "X"}])
    teacher.commit()

    assert teacher.query(SubjectModel).count() == 1


@pytest.mark.parametrize(
    "write",
    [
        lambda db: db.bulk_insert_mappings(SubjectModel, [{"name": "Algebra", "instructor": "X"}]),
        lambda db: db.bulk_save_objects([SubjectModel(name="Algebra", instructor="X")]),
    ],
    ids=["bulk_insert_mappings", "bulk_save_objects"],
)
def test_legacy_bulk_inserts_are_checked(session_for, make_account, write):
    pupil = session_for(make_account("pupil@school.edu", role="student"))

    with pytest.raises(PolicyViolationError):
        write(pupil)
    pupil.rollback()

    with elevated(pupil):
        assert pupil.query(SubjectModel).count() == 0


def test_legacy_bulk_update_is_checked(session_for, make_account):
    teacher = session_for(make_account("t@school.edu", role="teacher"))
    subject = SubjectModel(name="Algebra", instructor="X")
    teacher.add(subject)
    teacher.commit()

    pupil = session_for(make_account("pupil@school.edu", role="student"))
    with pytest.raises(PolicyViolationError):
        pupil.bulk_update_mappings(SubjectModel, [{"id": subject.id, "name": "Hacked"}])
    pupil.rollback()

    assert teacher.query(SubjectModel.name).scalar() == "Algebra"


def test_staff_bulk_insert_is_allowed(session_for, make_account):
    teacher = session_for(make_account("t@school.edu", role="teacher"))

    teacher.bulk_insert_mappings(SubjectModel, [{"name": "Algebra", "instructor": "X"}])
    teacher.commit()

    assert teacher.query(SubjectModel).count() == 1


def test_profile_update_only_own_row(session_for, make_account):
    alice_id = make_account("alice@school.edu")
    bob_id = make_account("bob@school.edu")
    db = session_for(alice_id)

    own = db.get(ProfileModel, alice_id)
    own.first_name = "Alice"
    db.commit()
    assert db.get(ProfileModel, alice_id).first_name == "Alice"

    other = db.get(ProfileModel, bob_id)
    other.first_name = "Mallory"
    with pytest.raises(PolicyViolationError):
        db.commit()
    db.rollback()
    assert db.get(ProfileModel, bob_id).first_name is None


def test_profiles_are_never_inserted_by_callers(session_for, make_account):
    admin_id = make_account("admin@school.edu", role="admin")
    db = session_for(admin_id)

    db.add(ProfileModel(id=admin_id, username="dupe"))
    with pytest.raises(PolicyViolationError):
        db.commit()


def test_role_assignments_visible_to_owner_only(session_for, make_account):
    pupil_id = make_account("pupil@school.edu", role="student")
    make_account("t@school.edu", role="teacher")

    rows = session_for(pupil_id).query(UserRoleModel).all()

    assert [(r.user_id, r.role) for r in rows] == [(pupil_id, AppRole.STUDENT)]


def test_admin_sees_and_manages_all_role_assignments(session_for, make_account):
    admin_id = make_account("admin@school.edu", role="admin")
    teacher_id = make_account("t@school.edu")
    db = session_for(admin_id)

    db.add(UserRoleModel(user_id=teacher_id, role=AppRole.TEACHER))
    db.commit()

    assert db.query(UserRoleModel).count() == 2


def test_teacher_cannot_grant_roles(session_for, make_account):
    teacher_id = make_account("t@school.edu", role="teacher")
    db = session_for(teacher_id)

    db.add(UserRoleModel(user_id=teacher_id, role=AppRole.ADMIN))
    with pytest.raises(PolicyViolationError):
        db.commit()
