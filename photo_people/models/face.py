"""Face model."""
from sqlalchemy import Column, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship
import uuid

from photo_people.db.base import Base
from .base import TimestampMixin


class Face(Base, TimestampMixin):
    """Detected face instance on a single asset."""

    __tablename__ = 'asset_faces'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    asset_id = Column(Uuid(as_uuid=True), ForeignKey('assets.id', ondelete='CASCADE'), nullable=False, index=True)
    person_id = Column(Uuid(as_uuid=True), ForeignKey('person.id', ondelete='SET NULL'), nullable=True, index=True)

    # Bounding box in source-image pixels
    bounding_box_x1 = Column(Integer, nullable=False)
    bounding_box_y1 = Column(Integer, nullable=False)
    bounding_box_x2 = Column(Integer, nullable=False)
    bounding_box_y2 = Column(Integer, nullable=False)

    # Source image dimensions at detection time
    image_width = Column(Integer, nullable=False)
    image_height = Column(Integer, nullable=False)

    # Relationships
    asset = relationship('Asset', back_populates='faces')
    person = relationship('Person', back_populates='faces')

    def __repr__(self) -> str:
        return f'<Face(id={self.id}, asset_id={self.asset_id}, person_id={self.person_id})>'
