"""
unirecords: an in-memory academic records manager.

Tracks students, courses, course registrations and grades for a university,
and enforces the rules that govern how those records may change.
"""

__version__ = "1.0.0"
__author__ = "unirecords Development Team"
__description__ = "In-memory academic records manager"

from .services import RecordsManager

__all__ = ["RecordsManager"]
