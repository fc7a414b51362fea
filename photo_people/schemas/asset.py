"""Asset projections exposed by the person endpoints."""
from typing import Dict, Optional
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from photo_people.models.enums import AssetType


class AssetResponse(BaseModel):
    """Minimal asset info."""
    id: UUID
    owner_id: UUID
    type: AssetType
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AssetStatsResponse(BaseModel):
    """Asset counts by type."""
    images: int = 0
    videos: int = 0
    total: int = 0


def map_stats(stats: Dict[AssetType, int]) -> AssetStatsResponse:
    """Build the response from per-type counts."""
    return AssetStatsResponse(
        images=stats.get(AssetType.IMAGE, 0),
        videos=stats.get(AssetType.VIDEO, 0),
        total=sum(stats.values()),
    )
