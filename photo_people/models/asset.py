"""Asset model."""
from sqlalchemy import Column, Enum, String, Uuid
from sqlalchemy.orm import relationship
import uuid

from photo_people.db.base import Base
from .base import TimestampMixin
from .enums import AssetType


class Asset(Base, TimestampMixin):
    """Media item owned by a single account."""

    __tablename__ = 'assets'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    owner_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    type = Column(Enum(AssetType), nullable=False, default=AssetType.IMAGE)
    original_path = Column(String(1024), nullable=False, default='')

    # Relationships
    faces = relationship('Face', back_populates='asset', cascade='all, delete-orphan')

    def __repr__(self) -> str:
        return f'<Asset(id={self.id}, type={self.type})>'
