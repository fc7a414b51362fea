"""Import all models so the metadata is complete."""
from .base import TimestampMixin
from .enums import AssetType
from .asset import Asset
from .face import Face
from .person import Person

__all__ = [
    "TimestampMixin",
    "AssetType",
    "Asset",
    "Face",
    "Person",
]
