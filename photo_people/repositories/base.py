"""Abstract person store consumed by the person service."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID

from photo_people.models.asset import Asset
from photo_people.models.face import Face
from photo_people.models.person import Person


class PersonStore(ABC):
    """Durable record of persons and their face associations.

    Every mutating primitive is atomic: it either applies completely or
    leaves the store unchanged and raises.
    """

    @abstractmethod
    def get_all(
        self,
        owner_id: UUID,
        minimum_face_count: int = 1,
        with_hidden: bool = False
    ) -> List[Person]:
        """Persons of an owner having at least ``minimum_face_count`` faces."""

    @abstractmethod
    def get_all_without_faces(self) -> List[Person]:
        """Persons of every owner that have no faces."""

    @abstractmethod
    def get_by_id(self, owner_id: UUID, person_id: UUID) -> Optional[Person]:
        """Person owned by ``owner_id``, or None."""

    @abstractmethod
    def get_assets(self, owner_id: UUID, person_id: UUID) -> List[Asset]:
        """Assets of ``owner_id`` containing a face of the person."""

    @abstractmethod
    def get_face_by_id(self, asset_id: UUID, person_id: UUID) -> Optional[Face]:
        """Face of the person on the given asset, or None."""

    @abstractmethod
    def update(self, person_id: UUID, changes: Dict[str, Any]) -> Optional[Person]:
        """Apply field changes; None if the person no longer exists."""

    @abstractmethod
    def delete(self, person: Person) -> Person:
        """Physically remove a person record."""

    @abstractmethod
    def prepare_reassign_faces(self, old_person_id: UUID, new_person_id: UUID) -> List[UUID]:
        """Detach the old person's faces on assets where both persons have one.

        Returns the conflicting asset ids.
        """

    @abstractmethod
    def reassign_faces(self, old_person_id: UUID, new_person_id: UUID) -> int:
        """Move every face of the old person to the new person."""
