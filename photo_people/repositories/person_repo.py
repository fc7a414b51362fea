"""Person repository for database operations."""
from contextlib import contextmanager
from typing import List, Optional, Dict, Any
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import func, case, distinct
import logging

from photo_people.models.asset import Asset
from photo_people.models.face import Face
from photo_people.models.person import Person
from .base import PersonStore

logger = logging.getLogger(__name__)


class PersonRepository(PersonStore):
    """SQLAlchemy-backed person store.

    Each mutating call runs in its own transaction and rolls back on error,
    so callers never observe a half-applied reassignment.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def get_all(
        self,
        owner_id: UUID,
        minimum_face_count: int = 1,
        with_hidden: bool = False
    ) -> List[Person]:
        """Get persons of an owner with enough faces, visible and named first, most seen first."""
        query = (
            self.db.query(Person)
            .outerjoin(Face, Face.person_id == Person.id)
            .filter(Person.owner_id == owner_id)
        )

        if not with_hidden:
            query = query.filter(Person.is_hidden.is_(False))

        return (
            query.group_by(Person.id)
            .having(func.count(Face.id) >= minimum_face_count)
            .order_by(
                Person.is_hidden.asc(),
                case((Person.name == '', 1), else_=0),
                func.count(Face.id).desc(),
                Person.name.asc(),
                Person.created_at.asc()
            )
            .all()
        )

    def get_all_without_faces(self) -> List[Person]:
        """Get orphaned persons across all owners."""
        return self.db.query(Person).filter(~Person.faces.any()).all()

    def get_by_id(self, owner_id: UUID, person_id: UUID) -> Optional[Person]:
        """Get person by ID within the owner's scope."""
        return self.db.query(Person).filter(
            Person.id == person_id,
            Person.owner_id == owner_id
        ).first()

    def get_assets(self, owner_id: UUID, person_id: UUID) -> List[Asset]:
        """Get all assets showing this person."""
        return (
            self.db.query(Asset)
            .join(Face, Face.asset_id == Asset.id)
            .join(Person, Face.person_id == Person.id)
            .filter(
                Person.id == person_id,
                Person.owner_id == owner_id,
                Asset.owner_id == owner_id
            )
            .distinct()
            .order_by(Asset.created_at.desc())
            .all()
        )

    def get_face_by_id(self, asset_id: UUID, person_id: UUID) -> Optional[Face]:
        """Get the person's face on an asset."""
        return self.db.query(Face).filter(
            Face.asset_id == asset_id,
            Face.person_id == person_id
        ).first()

    def update(self, person_id: UUID, changes: Dict[str, Any]) -> Optional[Person]:
        """Update person details."""
        person = self.db.get(Person, person_id)
        if not person:
            return None

        with self._transaction():
            for field, value in changes.items():
                setattr(person, field, value)

        self.db.refresh(person)
        return person

    def delete(self, person: Person) -> Person:
        """Hard delete a person. Faces still pointing at it are left unassigned."""
        with self._transaction():
            self.db.delete(person)
        return person

    def prepare_reassign_faces(self, old_person_id: UUID, new_person_id: UUID) -> List[UUID]:
        """Detach the old person's faces on assets already showing the new person."""
        rows = (
            self.db.query(Face.asset_id)
            .filter(Face.person_id.in_([old_person_id, new_person_id]))
            .group_by(Face.asset_id)
            .having(func.count(distinct(Face.person_id)) > 1)
            .all()
        )
        asset_ids = [row[0] for row in rows]

        if asset_ids:
            with self._transaction():
                self.db.query(Face).filter(
                    Face.person_id == old_person_id,
                    Face.asset_id.in_(asset_ids)
                ).update({Face.person_id: None}, synchronize_session=False)

        logger.debug(
            f"Found {len(asset_ids)} conflicting assets",
            extra={"old_person_id": str(old_person_id), "new_person_id": str(new_person_id)}
        )
        return asset_ids

    def reassign_faces(self, old_person_id: UUID, new_person_id: UUID) -> int:
        """Move all faces from one person to another in a single statement."""
        with self._transaction():
            count = self.db.query(Face).filter(
                Face.person_id == old_person_id
            ).update({Face.person_id: new_person_id}, synchronize_session=False)

        return count
