"""Pydantic schemas for the person service."""
from .auth import AuthUser
from .asset import AssetResponse, AssetStatsResponse
from .job import JobItem, JobName
from .person import (
    BulkIdErrorReason,
    BulkIdResponse,
    MergePersonRequest,
    PeopleResponse,
    PeopleUpdate,
    PeopleUpdateItem,
    PersonResponse,
    PersonUpdate,
)

__all__ = [
    "AuthUser",
    "AssetResponse",
    "AssetStatsResponse",
    "JobItem",
    "JobName",
    "BulkIdErrorReason",
    "BulkIdResponse",
    "MergePersonRequest",
    "PeopleResponse",
    "PeopleUpdate",
    "PeopleUpdateItem",
    "PersonResponse",
    "PersonUpdate",
]
