"""
Person Management API
=====================

Thin HTTP surface over the person service. Domain errors are translated
to responses by the application's exception handlers.
"""

from typing import List
from uuid import UUID
import logging

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import StreamingResponse

from photo_people.api.deps import get_current_user, get_person_service
from photo_people.schemas.asset import AssetResponse, AssetStatsResponse
from photo_people.schemas.auth import AuthUser
from photo_people.schemas.person import (
    BulkIdResponse,
    MergePersonRequest,
    PeopleResponse,
    PeopleUpdate,
    PersonResponse,
    PersonUpdate,
)
from photo_people.services.person_service import PersonService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=PeopleResponse)
def get_all_people(
    with_hidden: bool = Query(False, description="Include hidden people"),
    current_user: AuthUser = Depends(get_current_user),
    service: PersonService = Depends(get_person_service)
):
    """List people with at least one face and a thumbnail."""
    return service.get_all(current_user, with_hidden=with_hidden)


@router.put("", response_model=List[BulkIdResponse])
def update_people(
    dto: PeopleUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: PersonService = Depends(get_person_service)
):
    """Update several people; each item reports its own outcome."""
    results = service.update_people(current_user, dto)
    logger.info(
        f"Bulk updated {sum(1 for r in results if r.success)}/{len(results)} people",
        extra={"user_id": str(current_user.id)}
    )
    return results


@router.get("/{person_id}", response_model=PersonResponse)
def get_person(
    person_id: UUID = Path(..., description="Person ID"),
    current_user: AuthUser = Depends(get_current_user),
    service: PersonService = Depends(get_person_service)
):
    return service.get_by_id(current_user, person_id)


@router.put("/{person_id}", response_model=PersonResponse)
def update_person(
    dto: PersonUpdate,
    person_id: UUID = Path(..., description="Person ID"),
    current_user: AuthUser = Depends(get_current_user),
    service: PersonService = Depends(get_person_service)
):
    return service.update(current_user, person_id, dto)


@router.get("/{person_id}/statistics", response_model=AssetStatsResponse)
def get_person_statistics(
    person_id: UUID = Path(..., description="Person ID"),
    current_user: AuthUser = Depends(get_current_user),
    service: PersonService = Depends(get_person_service)
):
    return service.get_statistics(current_user, person_id)


@router.get("/{person_id}/thumbnail")
def get_person_thumbnail(
    person_id: UUID = Path(..., description="Person ID"),
    current_user: AuthUser = Depends(get_current_user),
    service: PersonService = Depends(get_person_service)
):
    """Stream the person's JPEG thumbnail."""
    stream = service.get_thumbnail(current_user, person_id)
    headers = {}
    if stream.length is not None:
        headers["Content-Length"] = str(stream.length)
    return StreamingResponse(
        stream.iter_chunks(),
        media_type=stream.content_type,
        headers=headers
    )


@router.get("/{person_id}/assets", response_model=List[AssetResponse])
def get_person_assets(
    person_id: UUID = Path(..., description="Person ID"),
    current_user: AuthUser = Depends(get_current_user),
    service: PersonService = Depends(get_person_service)
):
    return service.get_assets(current_user, person_id)


@router.post("/{person_id}/merge", response_model=List[BulkIdResponse])
def merge_person(
    dto: MergePersonRequest,
    person_id: UUID = Path(..., description="Primary person ID"),
    current_user: AuthUser = Depends(get_current_user),
    service: PersonService = Depends(get_person_service)
):
    """Merge the given people into this person."""
    return service.merge_person(current_user, person_id, dto)
