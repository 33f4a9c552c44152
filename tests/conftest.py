# tests/conftest.py

from datetime import date, datetime, timezone

import pytest

from unirecords.core.enums import CourseType, Faculty, Semester, StudentStatus
from unirecords.core.events import EventLog
from unirecords.services import RecordsManager

FIXED_NOW = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def manager():
    return RecordsManager(clock=lambda: FIXED_NOW)


@pytest.fixture
def event_log(manager):
    log = EventLog()
    manager.add_event_handler(log)
    return log


@pytest.fixture
def student_data():
    def _make(full_name="Ivan Ivanov", faculty=Faculty.COMPUTER_SCIENCE, **overrides):
        data = {
            "full_name": full_name,
            "faculty": faculty,
            "year": 1,
            "status": StudentStatus.ACTIVE,
            "enrollment_date": date(2024, 9, 1),
            "group_number": "CS-101",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def course_data():
    def _make(name="Programming", faculty=Faculty.COMPUTER_SCIENCE, **overrides):
        data = {
            "name": name,
            "course_type": CourseType.MANDATORY,
            "credits": 5,
            "semester": Semester.FIRST,
            "faculty": faculty,
            "max_students": 30,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def cs_student(manager, student_data):
    return manager.enroll(student_data())


@pytest.fixture
def cs_course(manager, course_data):
    return manager.add_course(course_data())


@pytest.fixture
def registered(manager, cs_student, cs_course):
    manager.register_for_course(cs_student.id, cs_course.id)
    return cs_student, cs_course


@pytest.fixture
def fixed_now():
    return FIXED_NOW
