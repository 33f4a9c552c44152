"""
Core interfaces and abstract base classes for the records manager.
"""

from abc import ABC, abstractmethod

from .enums import EventType


class RegistrationPolicy(ABC):
    """Abstract base class for course registration rules."""

    @abstractmethod
    def can_register(self, student: 'Student', course: 'Course', registered_count: int) -> bool:
        """Check if a student can register for a course."""
        pass

    @abstractmethod
    def rejection(self, student: 'Student', course: 'Course', registered_count: int) -> 'EnrollmentError':
        """Build the error raised when this policy rejects a registration."""
        pass

    @abstractmethod
    def get_policy_name(self) -> str:
        """Get the name of this policy."""
        pass


class EventHandler(ABC):
    """Abstract base class for record event handlers."""

    @abstractmethod
    def handle_event(self, event: 'RecordEvent') -> None:
        """Handle an event."""
        pass

    @abstractmethod
    def can_handle(self, event_type: EventType) -> bool:
        """Check if this handler can handle the event type."""
        pass
