"""
Pydantic input models for creating students and courses.

Only field types and enum membership are checked; any well-typed value is
accepted. The one bound is a non-negative course capacity.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from ..core.enums import CourseType, Faculty, Semester, StudentStatus


class StudentCreate(BaseModel):
    """Everything needed to enroll a student, except the id."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    full_name: str
    faculty: Faculty
    year: int
    status: StudentStatus = StudentStatus.ACTIVE
    enrollment_date: date = Field(default_factory=date.today)
    group_number: str


class CourseCreate(BaseModel):
    """Everything needed to add a course, except the id."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    course_type: CourseType
    credits: int
    semester: Semester
    faculty: Faculty
    max_students: int = Field(..., ge=0)
