"""Storage-level constraints, generated columns, cascades and provisioning."""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import PolicyViolationError
from core.policies import elevated
from models import (
    AccountModel,
    AppRole,
    AttendanceModel,
    GradeModel,
    ProfileModel,
    StudentModel,
    SubjectModel,
    UserRoleModel,
)
from utils.account_manager import AccountManager


@pytest.fixture
def db(session_factory):
    with session_factory() as session:
        with elevated(session):
            yield session


@pytest.fixture
def student(db):
    model = StudentModel(
        first_name="Ana",
        last_name="Reyes",
        id_number="2024-001",
        email="ana@school.edu",
        course="BSCS",
    )
    db.add(model)
    db.commit()
    return model


@pytest.fixture
def subject(db):
    model = SubjectModel(name="Algebra", instructor="Mr. Cruz")
    db.add(model)
    db.commit()
    return model


def test_grade_average_is_generated(db, student, subject):
    grade = GradeModel(
        partial_score=80, exam_score=90, student_id=student.id, subject_id=subject.id
    )
    db.add(grade)
    db.commit()
    db.refresh(grade)

    assert float(grade.average) == 85.0


def test_grade_average_follows_score_updates(db, student, subject):
    grade = GradeModel(
        partial_score=80, exam_score=90, student_id=student.id, subject_id=subject.id
    )
    db.add(grade)
    db.commit()

    grade.exam_score = 70
    db.commit()
    db.refresh(grade)

    assert float(grade.average) == 75.0


def test_second_grade_for_same_pair_is_rejected(db, student, subject):
    db.add(GradeModel(partial_score=80, exam_score=90, student_id=student.id, subject_id=subject.id))
    db.commit()

    db.add(GradeModel(partial_score=50, exam_score=60, student_id=student.id, subject_id=subject.id))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()

    assert db.query(GradeModel).count() == 1


@pytest.mark.parametrize("partial, exam", [(-1, 50), (50, 100.5)])
def test_scores_outside_range_are_rejected(db, student, subject, partial, exam):
    db.add(
        GradeModel(partial_score=partial, exam_score=exam, student_id=student.id, subject_id=subject.id)
    )
    with pytest.raises(IntegrityError):
        db.commit()


def test_duplicate_attendance_is_rejected_but_other_dates_are_not(db, student, subject):
    day = date(2024, 3, 4)
    db.add(AttendanceModel(date=day, present=True, student_id=student.id, subject_id=subject.id))
    db.commit()

    db.add(AttendanceModel(date=day, present=False, student_id=student.id, subject_id=subject.id))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()

    db.add(AttendanceModel(date=date(2024, 3, 5), student_id=student.id, subject_id=subject.id))
    db.commit()

    records = db.query(AttendanceModel).order_by(AttendanceModel.date).all()
    assert [r.date for r in records] == [day, date(2024, 3, 5)]
    assert records[1].present is False


def test_deleting_student_removes_attendance_and_grades(db, student, subject):
    db.add(AttendanceModel(date=date(2024, 3, 4), present=True, student_id=student.id, subject_id=subject.id))
    db.add(GradeModel(partial_score=80, exam_score=90, student_id=student.id, subject_id=subject.id))
    db.commit()

    db.delete(student)
    db.commit()

    assert db.query(AttendanceModel).count() == 0
    assert db.query(GradeModel).count() == 0
    assert db.query(SubjectModel).count() == 1


def test_deleting_subject_removes_attendance_and_grades(db, student, subject):
    db.add(AttendanceModel(date=date(2024, 3, 4), present=True, student_id=student.id, subject_id=subject.id))
    db.add(GradeModel(partial_score=80, exam_score=90, student_id=student.id, subject_id=subject.id))
    db.commit()

    db.delete(subject)
    db.commit()

    assert db.query(AttendanceModel).count() == 0
    assert db.query(GradeModel).count() == 0
    assert db.query(StudentModel).count() == 1


def test_new_account_gets_exactly_one_profile(db):
    account = AccountManager(db).create_account(
        "jane.doe@example.com", "secret123", {"first_name": "Jane", "last_name": "Doe"}
    )

    profiles = db.query(ProfileModel).filter(ProfileModel.id == account.id).all()
    assert len(profiles) == 1
    assert profiles[0].username == "jane.doe"
    assert profiles[0].first_name == "Jane"
    assert profiles[0].email == "jane.doe@example.com"


def test_profile_username_comes_from_metadata(db):
    account = AccountManager(db).create_account(
        "jd@example.com", "secret123", {"username": "janed"}
    )

    assert db.get(ProfileModel, account.id).username == "janed"


def test_username_collision_fails_the_whole_signup(db):
    manager = AccountManager(db)
    manager.create_account("first@example.com", "secret123", {"username": "taken"})

    with pytest.raises(IntegrityError):
        manager.create_account("second@example.com", "secret123", {"username": "taken"})

    assert db.query(AccountModel).count() == 1
    assert db.query(ProfileModel).count() == 1


def test_deleting_account_removes_profile(db):
    account = AccountManager(db).create_account("gone@example.com", "secret123")

    db.delete(account)
    db.commit()

    assert db.query(ProfileModel).count() == 0


def test_account_and_roles_are_created_together(db):
    account = AccountManager(db).create_account(
        "boss@example.com", "secret123", roles=[AppRole.ADMIN]
    )

    roles = db.query(UserRoleModel).filter(UserRoleModel.user_id == account.id).all()
    assert [r.role for r in roles] == [AppRole.ADMIN]


def test_rejected_role_grant_leaves_no_account(session_factory):
    with session_factory() as anonymous:
        with pytest.raises(PolicyViolationError):
            AccountManager(anonymous).create_account(
                "boss@example.com", "secret123", roles=[AppRole.ADMIN]
            )

    with session_factory() as db, elevated(db):
        assert db.query(AccountModel).count() == 0
        assert db.query(ProfileModel).count() == 0
        assert db.query(UserRoleModel).count() == 0
