"""
Services module containing the records manager and its registration rules.
"""

from .records_manager import RecordsManager
from .registration_policies import CapacityPolicy, FacultyMatchPolicy
from .schemas import CourseCreate, StudentCreate

__all__ = [
    "RecordsManager",
    "CapacityPolicy",
    "FacultyMatchPolicy",
    "CourseCreate",
    "StudentCreate",
]
