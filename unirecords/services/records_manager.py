"""
Records manager: the single owner of students, courses, registrations and grades.

Every mutation is validated against the shared state before anything is
written, so a rejected call leaves the records exactly as they were.
"""

import threading
from contextlib import nullcontext
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar, Union

import pydantic
import structlog

from ..config import RecordsConfig
from ..core.entities import Course, GradeRecord, Registration, Student
from ..core.enums import EventType, Faculty, Grade, Semester, StudentStatus
from ..core.events import RecordEvent
from ..core.exceptions import (
    NotRegisteredError, RecordsError, ResourceNotFoundError, ValidationError
)
from ..core.interfaces import EventHandler, RegistrationPolicy
from .registration_policies import CapacityPolicy, FacultyMatchPolicy
from .schemas import CourseCreate, StudentCreate

logger = structlog.get_logger(__name__)

E = TypeVar('E')
M = TypeVar('M', bound=pydantic.BaseModel)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordsManager:
    """
    In-memory academic records with rule enforcement and aggregate queries.

    ``clock`` stamps everything the manager records: entity creation and
    update times, grade times and event times. ``config.log_level`` and
    ``config.log_format`` are not applied here; pass the same config to
    ``unirecords.config.configure_logging`` to activate them.
    """

    def __init__(self, config: Optional[RecordsConfig] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self._config = config or RecordsConfig()
        self._clock = clock or _utc_now
        self._students: Dict[int, Student] = {}
        self._courses: Dict[int, Course] = {}
        self._registrations: List[Registration] = []
        self._grades: List[GradeRecord] = []
        self._next_student_id = 1
        self._next_course_id = 1
        # built-in rules run first and in this order
        self._policies: List[RegistrationPolicy] = [CapacityPolicy(), FacultyMatchPolicy()]
        self._event_handlers: List[EventHandler] = []
        self._lock = threading.RLock() if self._config.thread_safe else nullcontext()

    @property
    def config(self) -> RecordsConfig:
        return self._config

    def add_policy(self, policy: RegistrationPolicy) -> None:
        """Add a registration policy, evaluated after the built-in ones."""
        with self._lock:
            self._policies.append(policy)

    def add_event_handler(self, handler: EventHandler) -> None:
        """Add an event handler."""
        with self._lock:
            self._event_handlers.append(handler)

    # --- mutations ---

    def enroll(self, student_data: Union[StudentCreate, Mapping[str, Any]]) -> Student:
        """Enroll a new student and return it with its assigned id."""
        data = self._validate(StudentCreate, student_data)
        with self._lock:
            student = Student(
                entity_id=self._next_student_id,
                created_at=self._clock(),
                full_name=data.full_name,
                faculty=data.faculty,
                year=data.year,
                status=data.status,
                enrollment_date=data.enrollment_date,
                group_number=data.group_number,
            )
            self._students[student.id] = student
            self._next_student_id += 1

            logger.info("student_enrolled", student_id=student.id, faculty=student.faculty.value)
            self._publish_event(EventType.STUDENT_ENROLLED, student.to_dict())
            return student

    def add_course(self, course_data: Union[CourseCreate, Mapping[str, Any]]) -> Course:
        """Add a new course and return it with its assigned id."""
        data = self._validate(CourseCreate, course_data)
        with self._lock:
            course = Course(
                entity_id=self._next_course_id,
                created_at=self._clock(),
                name=data.name,
                course_type=data.course_type,
                credits=data.credits,
                semester=data.semester,
                faculty=data.faculty,
                max_students=data.max_students,
            )
            self._courses[course.id] = course
            self._next_course_id += 1

            logger.info("course_added", course_id=course.id, faculty=course.faculty.value)
            self._publish_event(EventType.COURSE_ADDED, course.to_dict())
            return course

    def register_for_course(self, student_id: int, course_id: int) -> None:
        """
        Register a student for a course.

        Checks, in order: the student exists, the course exists, the course
        has room, and the student belongs to the course's faculty. Repeated
        registration of the same pair is accepted and counts against capacity.

        Raises:
            ResourceNotFoundError: Unknown student or course.
            CapacityExceededError: The course already holds max_students registrations.
            FacultyMismatchError: Student and course belong to different faculties.
        """
        with self._lock:
            try:
                student = self._require_student(student_id)
                course = self._require_course(course_id)
                self._evaluate_policies(student, course)
            except RecordsError as e:
                logger.debug("registration_rejected", student_id=student_id,
                             course_id=course_id, error_code=e.error_code,
                             policy=e.details.get('policy'))
                raise

            registration = Registration(student_id=student_id, course_id=course_id)
            self._registrations.append(registration)

            logger.info("student_registered", student_id=student_id, course_id=course_id)
            self._publish_event(EventType.COURSE_REGISTRATION, registration.to_dict())

    def set_grade(self, student_id: int, course_id: int, grade: Union[Grade, int]) -> None:
        """
        Record a grade for a registered student.

        The grade is stamped with the current time and the course's semester.
        Grades are append-only; grading the same course again adds a record.

        Raises:
            ValidationError: grade is not on the grade scale.
            NotRegisteredError: No registration exists for this student and course.
            ResourceNotFoundError: The course no longer exists.
        """
        grade = self._coerce_enum(Grade, grade, 'grade')
        with self._lock:
            if not self._is_registered(student_id, course_id):
                logger.debug("grade_rejected", student_id=student_id,
                             course_id=course_id, error_code="NOT_REGISTERED")
                raise NotRegisteredError(
                    f"Student {student_id} is not registered for course {course_id}",
                    error_code="NOT_REGISTERED",
                    details={'student_id': student_id, 'course_id': course_id},
                )

            # registration implies the course existed; it must still be there
            course = self._require_course(course_id)

            record = GradeRecord(
                student_id=student_id,
                course_id=course_id,
                grade=grade,
                recorded_at=self._clock(),
                semester=course.semester,
            )
            self._grades.append(record)

            logger.info("grade_recorded", student_id=student_id, course_id=course_id,
                        grade=grade.weight)
            self._publish_event(EventType.GRADE_RECORDED, record.to_dict())

    def update_student_status(self, student_id: int, new_status: Union[StudentStatus, str]) -> None:
        """Change a student's status. Expelled students stay expelled."""
        new_status = self._coerce_enum(StudentStatus, new_status, 'status')
        with self._lock:
            student = self._require_student(student_id)
            previous = student.status
            try:
                student.change_status(new_status, changed_at=self._clock())
            except RecordsError as e:
                logger.debug("status_change_rejected", student_id=student_id,
                             error_code=e.error_code)
                raise

            logger.info("student_status_changed", student_id=student_id,
                        previous=previous.value, status=new_status.value)
            self._publish_event(EventType.STATUS_CHANGED, {
                'student_id': student_id,
                'previous': previous.value,
                'status': new_status.value,
            })

    # --- queries ---

    def get_student(self, student_id: int) -> Student:
        """Get a student by id."""
        with self._lock:
            return self._require_student(student_id)

    def get_course(self, course_id: int) -> Course:
        """Get a course by id."""
        with self._lock:
            return self._require_course(course_id)

    def get_students_by_faculty(self, faculty: Union[Faculty, str]) -> List[Student]:
        """Get all students of a faculty in enrollment order."""
        faculty = self._coerce_enum(Faculty, faculty, 'faculty')
        with self._lock:
            return [s for s in self._students.values() if s.faculty is faculty]

    def get_student_grades(self, student_id: int) -> List[GradeRecord]:
        """Get all grade records of a student in the order they were recorded."""
        with self._lock:
            return [g for g in self._grades if g.student_id == student_id]

    def get_available_courses(self, faculty: Union[Faculty, str],
                              semester: Union[Semester, str]) -> List[Course]:
        """Get the courses a faculty offers in a semester."""
        faculty = self._coerce_enum(Faculty, faculty, 'faculty')
        semester = self._coerce_enum(Semester, semester, 'semester')
        with self._lock:
            return [c for c in self._courses.values()
                    if c.faculty is faculty and c.semester is semester]

    def get_course_registration_count(self, course_id: int) -> int:
        """Get number of registrations recorded for a course."""
        with self._lock:
            return sum(1 for r in self._registrations if r.course_id == course_id)

    def get_registered_courses(self, student_id: int) -> List[Course]:
        """Get the courses a student is registered for, each listed once."""
        with self._lock:
            seen = set()
            courses = []
            for registration in self._registrations:
                if registration.student_id != student_id or registration.course_id in seen:
                    continue
                seen.add(registration.course_id)
                course = self._courses.get(registration.course_id)
                if course is not None:
                    courses.append(course)
            return courses

    def calculate_average_grade(self, student_id: int) -> float:
        """
        Mean grade weight of a student.

        A student without grades averages 0, which ranks below any earned grade.
        """
        with self._lock:
            grades = self.get_student_grades(student_id)
            if not grades:
                return 0.0
            return sum(g.grade.weight for g in grades) / len(grades)

    def get_top_students(self, faculty: Union[Faculty, str]) -> List[Student]:
        """
        Students of a faculty sharing the highest average grade.

        All students tied at the top are returned. Students without grades
        never qualify, so a faculty with no grades yields an empty list.
        """
        with self._lock:
            averages = [
                (student, self.calculate_average_grade(student.id))
                for student in self.get_students_by_faculty(faculty)
            ]
            if not averages:
                return []

            top_average = max(average for _, average in averages)
            return [student for student, average in averages
                    if average == top_average and average > 0]

    def get_statistics(self) -> Dict[str, Any]:
        """Get record counts."""
        with self._lock:
            by_status = {status.value: 0 for status in StudentStatus}
            for student in self._students.values():
                by_status[student.status.value] += 1

            return {
                'total_students': len(self._students),
                'total_courses': len(self._courses),
                'total_registrations': len(self._registrations),
                'total_grades': len(self._grades),
                'students_by_status': by_status,
                'active_policies': len(self._policies),
                'event_handlers': len(self._event_handlers),
            }

    # --- internals ---

    def _require_student(self, student_id: int) -> Student:
        student = self._students.get(student_id)
        if student is None:
            raise ResourceNotFoundError("student", student_id)
        return student

    def _require_course(self, course_id: int) -> Course:
        course = self._courses.get(course_id)
        if course is None:
            raise ResourceNotFoundError("course", course_id)
        return course

    def _is_registered(self, student_id: int, course_id: int) -> bool:
        return any(r.student_id == student_id and r.course_id == course_id
                   for r in self._registrations)

    def _evaluate_policies(self, student: Student, course: Course) -> None:
        """Raise the rejection of the first policy that refuses the registration."""
        registered_count = self.get_course_registration_count(course.id)
        for policy in self._policies:
            if not policy.can_register(student, course, registered_count):
                error = policy.rejection(student, course, registered_count)
                error.details.setdefault('policy', policy.get_policy_name())
                raise error

    def _publish_event(self, event_type: EventType, payload: Dict[str, Any]) -> None:
        """Publish an event to all handlers."""
        event = RecordEvent(event_type=event_type, payload=payload, occurred_at=self._clock())

        for handler in self._event_handlers:
            if handler.can_handle(event_type):
                try:
                    handler.handle_event(event)
                except Exception as e:
                    logger.error("event_handler_failed", handler=handler.__class__.__name__,
                                 event_type=event_type.value, error=str(e))

    @staticmethod
    def _validate(model: Type[M], data: Union[M, Mapping[str, Any]]) -> M:
        if isinstance(data, model):
            return data
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid {model.__name__} data",
                details={'errors': e.errors(include_url=False)},
            ) from e

    @staticmethod
    def _coerce_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(value)
        except ValueError as e:
            raise ValidationError(
                f"Invalid {field_name}: {value!r}",
                details={'field': field_name, 'value': value},
            ) from e
