"""Person schemas for listing, editing and merging identities."""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import date
from enum import Enum
from uuid import UUID


class PersonResponse(BaseModel):
    """Public view of a person."""
    id: UUID
    name: str = Field("", description="Empty string when the person is unnamed")
    birth_date: Optional[date] = None
    thumbnail_path: Optional[str] = None
    is_hidden: bool = False

    model_config = ConfigDict(from_attributes=True)

    @field_validator('name', mode='before')
    @classmethod
    def default_name(cls, v):
        return v or ""


class PeopleResponse(BaseModel):
    """People list with counts."""
    total: int = Field(..., description="Persons meeting the face-count threshold")
    visible: int = Field(..., description="Of those, persons not hidden")
    people: List[PersonResponse]


class PersonUpdate(BaseModel):
    """Partial update of a person.

    ``feature_face_asset_id`` selects the face on that asset as the person's
    thumbnail and cannot be combined with the other fields.
    """
    name: Optional[str] = Field(None, max_length=255, description="Person name")
    birth_date: Optional[date] = Field(None, description="Person date of birth")
    is_hidden: Optional[bool] = Field(None, description="Hide person from the people list")
    feature_face_asset_id: Optional[UUID] = Field(
        None, description="Asset whose face becomes the person thumbnail"
    )

    @field_validator('birth_date')
    @classmethod
    def birth_date_not_in_future(cls, v):
        if v is not None and v > date.today():
            raise ValueError("Birth date cannot be in the future")
        return v


class PeopleUpdateItem(PersonUpdate):
    """Per-person update in a bulk request."""
    id: UUID = Field(..., description="Person ID")


class PeopleUpdate(BaseModel):
    """Bulk person update."""
    people: List[PeopleUpdateItem] = Field(default_factory=list)


class MergePersonRequest(BaseModel):
    """Persons to fold into the primary person."""
    ids: List[UUID] = Field(..., min_length=1, description="Secondary person IDs")


class BulkIdErrorReason(str, Enum):
    """Per-item failure reasons in bulk results."""
    DUPLICATE = "duplicate"
    NO_PERMISSION = "no_permission"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class BulkIdResponse(BaseModel):
    """Outcome for one id of a bulk operation."""
    id: UUID
    success: bool
    error: Optional[BulkIdErrorReason] = None

    @classmethod
    def ok(cls, id: UUID) -> "BulkIdResponse":
        return cls(id=id, success=True)

    @classmethod
    def failed(cls, id: UUID, reason: BulkIdErrorReason) -> "BulkIdResponse":
        return cls(id=id, success=False, error=reason)
