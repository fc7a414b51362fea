"""
Job Schemas
============

Typed job descriptors handed to the job dispatcher. Each job carries a
name and a payload; the dispatcher guarantees eventual execution.
"""

from typing import List, Union
from uuid import UUID
from enum import Enum

from pydantic import BaseModel, Field


class JobName(str, Enum):
    """Jobs emitted by the person service."""
    GENERATE_PERSON_THUMBNAIL = "generate-person-thumbnail"
    SEARCH_INDEX_ASSET = "search-index-asset"
    SEARCH_REMOVE_FACE = "search-remove-face"
    DELETE_FILES = "delete-files"


class BoundingBox(BaseModel):
    """Face bounding box in source-image pixel space."""
    x1: int
    x2: int
    y1: int
    y2: int


class FaceThumbnailJob(BaseModel):
    """Render a person thumbnail from one face."""
    asset_id: UUID
    person_id: UUID
    bounding_box: BoundingBox
    image_width: int = Field(..., ge=0)
    image_height: int = Field(..., ge=0)


class AssetIdsJob(BaseModel):
    """Re-index the given assets in search."""
    ids: List[UUID]


class AssetFaceJob(BaseModel):
    """Drop a person's face reference for one asset from search."""
    asset_id: UUID
    person_id: UUID


class DeleteFilesJob(BaseModel):
    """Remove stored blobs."""
    files: List[str]


JobPayload = Union[FaceThumbnailJob, AssetIdsJob, AssetFaceJob, DeleteFilesJob]


class JobItem(BaseModel):
    """Job descriptor as accepted by the dispatcher."""
    name: JobName
    data: JobPayload
