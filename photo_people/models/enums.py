"""Enums for database models."""
import enum


class AssetType(str, enum.Enum):
    """Media asset types."""
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    OTHER = "OTHER"
