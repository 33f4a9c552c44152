# tests/test_registration_policies.py

from datetime import date

import pytest

from unirecords.core.entities import Course, Student
from unirecords.core.enums import CourseType, Faculty, Semester, StudentStatus
from unirecords.core.exceptions import (
    CapacityExceededError,
    EnrollmentError,
    FacultyMismatchError,
)
from unirecords.core.interfaces import RegistrationPolicy
from unirecords.services import CapacityPolicy, FacultyMatchPolicy


def make_student(faculty=Faculty.ECONOMICS, year=1):
    return Student(1, "Anna Koval", faculty, year, StudentStatus.ACTIVE, date(2024, 9, 1), "EC-11")


def make_course(faculty=Faculty.ECONOMICS, max_students=2):
    return Course(1, "Microeconomics", CourseType.MANDATORY, 4, Semester.FIRST, faculty, max_students)


def test_capacity_policy_boundary():
    policy = CapacityPolicy()
    student, course = make_student(), make_course(max_students=2)

    assert policy.can_register(student, course, 0)
    assert policy.can_register(student, course, 1)
    assert not policy.can_register(student, course, 2)


def test_capacity_policy_rejection():
    error = CapacityPolicy().rejection(make_student(), make_course(max_students=2), 2)

    assert isinstance(error, CapacityExceededError)
    assert error.details == {"course_id": 1, "max_students": 2, "registered": 2}


def test_faculty_policy():
    policy = FacultyMatchPolicy()

    assert policy.can_register(make_student(Faculty.LAW), make_course(Faculty.LAW), 0)
    assert not policy.can_register(make_student(Faculty.LAW), make_course(Faculty.ENGINEERING), 0)


def test_faculty_policy_rejection():
    error = FacultyMatchPolicy().rejection(make_student(Faculty.LAW), make_course(Faculty.ECONOMICS), 0)

    assert isinstance(error, FacultyMismatchError)
    assert error.details["student_faculty"] == "law"
    assert error.details["course_faculty"] == "economics"


class SeniorsOnlyPolicy(RegistrationPolicy):
    def can_register(self, student, course, registered_count):
        return student.year >= 3

    def rejection(self, student, course, registered_count):
        return EnrollmentError("Seniors only", error_code="SENIORS_ONLY")

    def get_policy_name(self):
        return "SeniorsOnlyPolicy"


def test_custom_policy_runs_after_builtin_rules(manager, student_data, course_data):
    manager.add_policy(SeniorsOnlyPolicy())
    course = manager.add_course(course_data(max_students=1))
    junior = manager.enroll(student_data("Junior", year=1))
    senior = manager.enroll(student_data("Senior", year=3))
    outsider = manager.enroll(student_data("Outsider", faculty=Faculty.LAW, year=1))

    with pytest.raises(FacultyMismatchError):
        manager.register_for_course(outsider.id, course.id)

    with pytest.raises(EnrollmentError) as exc_info:
        manager.register_for_course(junior.id, course.id)
    assert exc_info.value.error_code == "SENIORS_ONLY"

    manager.register_for_course(senior.id, course.id)
    assert manager.get_course_registration_count(course.id) == 1
