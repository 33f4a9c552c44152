"""
Enumerations for the records domain.
"""

from enum import Enum
from functools import total_ordering


class StudentStatus(Enum):
    """Academic standing of a student."""
    ACTIVE = "active"
    ACADEMIC_LEAVE = "academic_leave"
    GRADUATED = "graduated"
    EXPELLED = "expelled"

    @property
    def is_terminal(self) -> bool:
        return self is StudentStatus.EXPELLED


class CourseType(Enum):
    """Kinds of courses offered."""
    MANDATORY = "mandatory"
    OPTIONAL = "optional"
    SPECIAL = "special"


class Semester(Enum):
    """Academic terms."""
    FIRST = "first"
    SECOND = "second"


class Faculty(Enum):
    """Organizational units students belong to and courses are offered under."""
    COMPUTER_SCIENCE = "computer_science"
    ECONOMICS = "economics"
    LAW = "law"
    ENGINEERING = "engineering"


@total_ordering
class Grade(Enum):
    """Grade scale. The value of each member is its numeric weight."""
    UNSATISFACTORY = 2
    SATISFACTORY = 3
    GOOD = 4
    EXCELLENT = 5

    @property
    def weight(self) -> int:
        return self.value

    def __lt__(self, other: "Grade") -> bool:
        if not isinstance(other, Grade):
            return NotImplemented
        return self.value < other.value


class EventType(Enum):
    """Types of record events published by the manager."""
    STUDENT_ENROLLED = "student_enrolled"
    COURSE_ADDED = "course_added"
    COURSE_REGISTRATION = "course_registration"
    GRADE_RECORDED = "grade_recorded"
    STATUS_CHANGED = "status_changed"
