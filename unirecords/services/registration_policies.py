"""
Built-in course registration policies.
"""

from ..core.entities import Course, Student
from ..core.exceptions import CapacityExceededError, EnrollmentError, FacultyMismatchError
from ..core.interfaces import RegistrationPolicy


class CapacityPolicy(RegistrationPolicy):
    """Policy that enforces a course's maximum number of students."""

    def can_register(self, student: Student, course: Course, registered_count: int) -> bool:
        """Check if course has capacity."""
        return registered_count < course.max_students

    def rejection(self, student: Student, course: Course, registered_count: int) -> EnrollmentError:
        return CapacityExceededError(
            f"Course {course.id} is full",
            error_code="CAPACITY_EXCEEDED",
            details={
                'course_id': course.id,
                'max_students': course.max_students,
                'registered': registered_count,
            },
        )

    def get_policy_name(self) -> str:
        return "CapacityPolicy"


class FacultyMatchPolicy(RegistrationPolicy):
    """Policy that only admits students from the course's own faculty."""

    def can_register(self, student: Student, course: Course, registered_count: int) -> bool:
        return student.faculty is course.faculty

    def rejection(self, student: Student, course: Course, registered_count: int) -> EnrollmentError:
        return FacultyMismatchError(
            f"Student faculty {student.faculty.value} does not match course faculty {course.faculty.value}",
            error_code="FACULTY_MISMATCH",
            details={
                'student_id': student.id,
                'course_id': course.id,
                'student_faculty': student.faculty.value,
                'course_faculty': course.faculty.value,
            },
        )

    def get_policy_name(self) -> str:
        return "FacultyMatchPolicy"
