"""Person model for face clusters."""
from sqlalchemy import Boolean, Column, Date, String, Uuid
from sqlalchemy.orm import relationship
import uuid

from photo_people.db.base import Base
from .base import TimestampMixin


class Person(Base, TimestampMixin):
    """Identity clustering one or more detected faces."""

    __tablename__ = 'person'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    owner_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    # Empty name means "unnamed"
    name = Column(String(255), nullable=False, default='')
    birth_date = Column(Date, nullable=True)

    # Null until the first thumbnail is generated
    thumbnail_path = Column(String(1024), nullable=True)
    is_hidden = Column(Boolean, nullable=False, default=False)

    # Relationships
    faces = relationship('Face', back_populates='person')

    def __repr__(self) -> str:
        return f'<Person(id={self.id}, name={self.name})>'
