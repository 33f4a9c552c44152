"""
Core module containing the entity model, enumerations and exceptions.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *
from .events import *

__all__ = [
    # Entities
    "AbstractEntity",
    "Student",
    "Course",
    "Registration",
    "GradeRecord",

    # Events
    "RecordEvent",
    "EventLog",

    # Interfaces
    "RegistrationPolicy",
    "EventHandler",

    # Enums
    "StudentStatus",
    "CourseType",
    "Semester",
    "Faculty",
    "Grade",
    "EventType",

    # Exceptions
    "RecordsError",
    "ValidationError",
    "ResourceNotFoundError",
    "EnrollmentError",
    "CapacityExceededError",
    "FacultyMismatchError",
    "NotRegisteredError",
    "IllegalTransitionError",
    "ConfigurationError",
]
