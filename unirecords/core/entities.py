"""
Core entities of the records domain.

Students and courses are identity-bearing entities whose ids are assigned by
the records manager. Registrations and grade records are immutable value
records that reference those ids.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from .enums import CourseType, Faculty, Grade, Semester, StudentStatus
from .exceptions import IllegalTransitionError


class AbstractEntity(ABC):
    """Base entity with a manager-assigned id, timestamps and versioning."""

    def __init__(self, entity_id: int, created_at: Optional[datetime] = None):
        self._id = entity_id
        self._created_at = created_at or datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1

    @property
    def id(self) -> int:
        """Get the entity ID."""
        return self._id

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    def _touch(self, at: Optional[datetime] = None) -> None:
        self._updated_at = at or datetime.now(timezone.utc)
        self._version += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'id': self._id,
            'created_at': self._created_at.isoformat(),
            'updated_at': self._updated_at.isoformat(),
            'version': self._version,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id}, version={self._version})"


class Student(AbstractEntity):
    """Student entity. Only the status changes after enrollment."""

    def __init__(self, entity_id: int, full_name: str, faculty: Faculty, year: int,
                 status: StudentStatus, enrollment_date: date, group_number: str,
                 created_at: Optional[datetime] = None):
        super().__init__(entity_id, created_at)
        self._full_name = full_name
        self._faculty = faculty
        self._year = year
        self._status = status
        self._enrollment_date = enrollment_date
        self._group_number = group_number

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def faculty(self) -> Faculty:
        return self._faculty

    @property
    def year(self) -> int:
        return self._year

    @property
    def status(self) -> StudentStatus:
        return self._status

    @property
    def enrollment_date(self) -> date:
        return self._enrollment_date

    @property
    def group_number(self) -> str:
        return self._group_number

    def change_status(self, new_status: StudentStatus, changed_at: Optional[datetime] = None) -> None:
        """
        Move the student to a new status.

        Expelled is terminal: once expelled, the only accepted status is
        Expelled again. Every other transition is allowed.
        """
        if self._status.is_terminal and new_status is not self._status:
            raise IllegalTransitionError(
                f"Cannot change status of expelled student {self._id}",
                error_code="ILLEGAL_TRANSITION",
                details={
                    'student_id': self._id,
                    'from': self._status.value,
                    'to': new_status.value,
                },
            )
        self._status = new_status
        self._touch(changed_at)

    def to_dict(self) -> Dict[str, Any]:
        """Convert student to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'full_name': self._full_name,
            'faculty': self._faculty.value,
            'year': self._year,
            'status': self._status.value,
            'enrollment_date': self._enrollment_date.isoformat(),
            'group_number': self._group_number,
        })
        return base_dict

    def __repr__(self) -> str:
        return f"Student(id={self._id}, full_name={self._full_name!r}, status={self._status.value})"


class Course(AbstractEntity):
    """Course entity representing an academic course."""

    def __init__(self, entity_id: int, name: str, course_type: CourseType, credits: int,
                 semester: Semester, faculty: Faculty, max_students: int,
                 created_at: Optional[datetime] = None):
        super().__init__(entity_id, created_at)
        self._name = name
        self._course_type = course_type
        self._credits = credits
        self._semester = semester
        self._faculty = faculty
        self._max_students = max_students

    @property
    def name(self) -> str:
        return self._name

    @property
    def course_type(self) -> CourseType:
        return self._course_type

    @property
    def credits(self) -> int:
        return self._credits

    @property
    def semester(self) -> Semester:
        return self._semester

    @property
    def faculty(self) -> Faculty:
        return self._faculty

    @property
    def max_students(self) -> int:
        return self._max_students

    def to_dict(self) -> Dict[str, Any]:
        """Convert course to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'course_type': self._course_type.value,
            'credits': self._credits,
            'semester': self._semester.value,
            'faculty': self._faculty.value,
            'max_students': self._max_students,
        })
        return base_dict

    def __repr__(self) -> str:
        return f"Course(id={self._id}, name={self._name!r}, faculty={self._faculty.value})"


@dataclass(frozen=True)
class Registration:
    """A student's registration for a course."""
    student_id: int
    course_id: int

    def to_dict(self) -> Dict[str, Any]:
        return {'student_id': self.student_id, 'course_id': self.course_id}


@dataclass(frozen=True)
class GradeRecord:
    """Immutable grade awarded to a student for a course."""
    student_id: int
    course_id: int
    grade: Grade
    recorded_at: datetime
    semester: Semester

    @property
    def value(self) -> int:
        return self.grade.weight

    def to_dict(self) -> Dict[str, Any]:
        return {
            'student_id': self.student_id,
            'course_id': self.course_id,
            'grade': self.grade.weight,
            'recorded_at': self.recorded_at.isoformat(),
            'semester': self.semester.value,
        }
