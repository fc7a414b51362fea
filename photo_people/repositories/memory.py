"""In-memory person store used by tests and local tooling."""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from photo_people.models.asset import Asset
from photo_people.models.enums import AssetType
from photo_people.models.face import Face
from photo_people.models.person import Person
from .base import PersonStore


class InMemoryPersonRepository(PersonStore):
    """Dict-backed store holding transient ORM instances."""

    def __init__(self):
        self.persons: Dict[UUID, Person] = {}
        self.faces: Dict[UUID, Face] = {}
        self.assets: Dict[UUID, Asset] = {}

    # Seeding helpers

    def add_person(
        self,
        owner_id: UUID,
        name: str = '',
        thumbnail_path: Optional[str] = None,
        is_hidden: bool = False,
        birth_date=None,
        person_id: Optional[UUID] = None
    ) -> Person:
        person = Person(
            id=person_id or uuid4(),
            owner_id=owner_id,
            name=name,
            birth_date=birth_date,
            thumbnail_path=thumbnail_path,
            is_hidden=is_hidden,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow(),
        )
        self.persons[person.id] = person
        return person

    def add_asset(self, owner_id: UUID, type: AssetType = AssetType.IMAGE) -> Asset:
        asset = Asset(
            id=uuid4(),
            owner_id=owner_id,
            type=type,
            original_path='',
            created_at=datetime.utcnow(),
        )
        self.assets[asset.id] = asset
        return asset

    def add_face(
        self,
        asset: Asset,
        person: Optional[Person],
        box=(10, 20, 110, 140),
        image_size=(1000, 800)
    ) -> Face:
        x1, y1, x2, y2 = box
        face = Face(
            id=uuid4(),
            asset_id=asset.id,
            person_id=person.id if person else None,
            bounding_box_x1=x1,
            bounding_box_y1=y1,
            bounding_box_x2=x2,
            bounding_box_y2=y2,
            image_width=image_size[0],
            image_height=image_size[1],
        )
        self.faces[face.id] = face
        return face

    def faces_of(self, person_id: UUID) -> List[Face]:
        return [f for f in self.faces.values() if f.person_id == person_id]

    # PersonStore

    def get_all(
        self,
        owner_id: UUID,
        minimum_face_count: int = 1,
        with_hidden: bool = False
    ) -> List[Person]:
        people = [
            p for p in self.persons.values()
            if p.owner_id == owner_id
            and (with_hidden or not p.is_hidden)
            and len(self.faces_of(p.id)) >= minimum_face_count
        ]
        return sorted(people, key=lambda p: (
            p.is_hidden, not p.name, -len(self.faces_of(p.id)), p.name, p.created_at
        ))

    def get_all_without_faces(self) -> List[Person]:
        return [p for p in self.persons.values() if not self.faces_of(p.id)]

    def get_by_id(self, owner_id: UUID, person_id: UUID) -> Optional[Person]:
        person = self.persons.get(person_id)
        if person is None or person.owner_id != owner_id:
            return None
        return person

    def get_assets(self, owner_id: UUID, person_id: UUID) -> List[Asset]:
        person = self.get_by_id(owner_id, person_id)
        if person is None:
            return []
        asset_ids = {f.asset_id for f in self.faces_of(person_id)}
        return [
            a for a in self.assets.values()
            if a.id in asset_ids and a.owner_id == owner_id
        ]

    def get_face_by_id(self, asset_id: UUID, person_id: UUID) -> Optional[Face]:
        for face in self.faces.values():
            if face.asset_id == asset_id and face.person_id == person_id:
                return face
        return None

    def update(self, person_id: UUID, changes: Dict[str, Any]) -> Optional[Person]:
        person = self.persons.get(person_id)
        if person is None:
            return None
        for field, value in changes.items():
            setattr(person, field, value)
        person.updated_at = datetime.utcnow()
        return person

    def delete(self, person: Person) -> Person:
        self.persons.pop(person.id, None)
        for face in self.faces_of(person.id):
            face.person_id = None
        return person

    def prepare_reassign_faces(self, old_person_id: UUID, new_person_id: UUID) -> List[UUID]:
        new_assets = {f.asset_id for f in self.faces_of(new_person_id)}
        conflicts = []
        for face in self.faces_of(old_person_id):
            if face.asset_id in new_assets:
                face.person_id = None
                if face.asset_id not in conflicts:
                    conflicts.append(face.asset_id)
        return conflicts

    def reassign_faces(self, old_person_id: UUID, new_person_id: UUID) -> int:
        moved = self.faces_of(old_person_id)
        for face in moved:
            face.person_id = new_person_id
        return len(moved)
