from .base import PersonStore
from .memory import InMemoryPersonRepository
from .person_repo import PersonRepository

__all__ = [
    "PersonStore",
    "InMemoryPersonRepository",
    "PersonRepository",
]
