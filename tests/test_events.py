# tests/test_events.py

import pytest

from unirecords.core.enums import EventType, Grade, StudentStatus
from unirecords.core.events import EventLog
from unirecords.core.exceptions import CapacityExceededError
from unirecords.core.interfaces import EventHandler


def test_mutations_publish_events_in_order(manager, event_log, student_data, course_data, fixed_now):
    student = manager.enroll(student_data())
    course = manager.add_course(course_data())
    manager.register_for_course(student.id, course.id)
    manager.set_grade(student.id, course.id, Grade.GOOD)
    manager.update_student_status(student.id, StudentStatus.GRADUATED)

    assert [e.event_type for e in event_log.replay()] == [
        EventType.STUDENT_ENROLLED,
        EventType.COURSE_ADDED,
        EventType.COURSE_REGISTRATION,
        EventType.GRADE_RECORDED,
        EventType.STATUS_CHANGED,
    ]
    events = event_log.events
    assert events[0].payload["full_name"] == "Ivan Ivanov"
    assert events[2].payload == {"student_id": student.id, "course_id": course.id}
    assert events[3].payload["grade"] == 4
    assert events[4].payload == {
        "student_id": student.id,
        "previous": "active",
        "status": "graduated",
    }
    assert all(e.occurred_at == fixed_now for e in events)


def test_failed_mutation_publishes_nothing(manager, student_data, course_data):
    course = manager.add_course(course_data(max_students=0))
    student = manager.enroll(student_data())
    log = EventLog()
    manager.add_event_handler(log)

    with pytest.raises(CapacityExceededError):
        manager.register_for_course(student.id, course.id)

    assert len(log) == 0


def test_event_log_filters_by_type(manager, student_data, course_data):
    grades_only = EventLog([EventType.GRADE_RECORDED])
    manager.add_event_handler(grades_only)
    student = manager.enroll(student_data())
    course = manager.add_course(course_data())
    manager.register_for_course(student.id, course.id)
    manager.set_grade(student.id, course.id, Grade.EXCELLENT)

    assert len(grades_only) == 1
    assert grades_only.events[0].payload["grade"] == 5


class ExplodingHandler(EventHandler):
    def can_handle(self, event_type):
        return True

    def handle_event(self, event):
        raise RuntimeError("boom")


def test_failing_handler_does_not_undo_mutation(manager, event_log, student_data):
    manager.add_event_handler(ExplodingHandler())
    later_log = EventLog()
    manager.add_event_handler(later_log)

    student = manager.enroll(student_data())

    assert manager.get_student(student.id) is student
    assert len(event_log) == 1
    assert len(later_log) == 1
