"""
Services package initializer.

Re-exports the person service and its collaborators so callers can import
from `photo_people.services` instead of deep module paths.
"""

from .jobs import CeleryJobDispatcher, InMemoryJobDispatcher, JobDispatcher
from .person_service import PersonService

__all__ = [
    "CeleryJobDispatcher",
    "InMemoryJobDispatcher",
    "JobDispatcher",
    "PersonService",
]
