"""
Person Identity Service
=======================

Reconciles detected face clusters with user edits. Single-entity operations
raise typed errors; bulk update and merge report one result per requested
id and never fail as a whole because of one item.

Every successful state change may emit jobs (thumbnail rendering, search
re-indexing, blob deletion) to the dispatcher; none of them is awaited.
"""

from collections import Counter
from typing import List, Optional
from uuid import UUID
import logging

from photo_people.app.config import settings
from photo_people.core.errors import BadRequestError, NotFoundError
from photo_people.models.person import Person
from photo_people.repositories.base import PersonStore
from photo_people.schemas.asset import AssetResponse, AssetStatsResponse, map_stats
from photo_people.schemas.auth import AuthUser
from photo_people.schemas.job import (
    AssetFaceJob,
    AssetIdsJob,
    BoundingBox,
    DeleteFilesJob,
    FaceThumbnailJob,
    JobItem,
    JobName,
)
from photo_people.schemas.person import (
    BulkIdErrorReason,
    BulkIdResponse,
    MergePersonRequest,
    PeopleResponse,
    PeopleUpdate,
    PersonResponse,
    PersonUpdate,
)
from photo_people.services.jobs import JobDispatcher
from photo_people.services.storage.base import ReadStream, StorageRepository

logger = logging.getLogger(__name__)

THUMBNAIL_CONTENT_TYPE = "image/jpeg"

# Fields a plain update may touch, and those whose change affects search
UPDATABLE_FIELDS = {"name", "birth_date", "is_hidden"}
SEARCH_FIELDS = {"name", "is_hidden"}


def map_person(person: Person) -> PersonResponse:
    return PersonResponse.model_validate(person)


class PersonService:
    """Queries, edits and merges people for an authenticated owner."""

    def __init__(
        self,
        repository: PersonStore,
        storage: StorageRepository,
        jobs: JobDispatcher,
        minimum_face_count: Optional[int] = None,
        thumbnail_prefix: Optional[str] = None
    ):
        self.repository = repository
        self.storage = storage
        self.jobs = jobs
        self.minimum_face_count = (
            settings.PERSON_MINIMUM_FACE_COUNT if minimum_face_count is None else minimum_face_count
        )
        self.thumbnail_prefix = settings.THUMBNAIL_PREFIX if thumbnail_prefix is None else thumbnail_prefix

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_all(self, auth_user: AuthUser, with_hidden: bool = False) -> PeopleResponse:
        """List people with thumbnails, visible and named ones first."""
        people = self.repository.get_all(
            auth_user.id,
            minimum_face_count=self.minimum_face_count,
            with_hidden=with_hidden
        )

        persons = [map_person(person) for person in people if person.thumbnail_path]
        persons.sort(key=lambda p: (p.is_hidden, not p.name))

        return PeopleResponse(
            total=len(persons),
            visible=sum(1 for p in persons if not p.is_hidden),
            people=[p for p in persons if with_hidden or not p.is_hidden],
        )

    def get_by_id(self, auth_user: AuthUser, person_id: UUID) -> PersonResponse:
        return map_person(self._find_or_fail(auth_user, person_id))

    def get_thumbnail(self, auth_user: AuthUser, person_id: UUID) -> ReadStream:
        person = self.repository.get_by_id(auth_user.id, person_id)
        if not person or not person.thumbnail_path:
            raise NotFoundError(f"Thumbnail for person {person_id} not found")

        return self.storage.open_read_stream(person.thumbnail_path, THUMBNAIL_CONTENT_TYPE)

    def get_assets(self, auth_user: AuthUser, person_id: UUID) -> List[AssetResponse]:
        assets = self.repository.get_assets(auth_user.id, person_id)
        return [AssetResponse.model_validate(asset) for asset in assets]

    def get_statistics(self, auth_user: AuthUser, person_id: UUID) -> AssetStatsResponse:
        """Count the person's assets by type."""
        self._find_or_fail(auth_user, person_id)
        assets = self.repository.get_assets(auth_user.id, person_id)
        return map_stats(Counter(asset.type for asset in assets))

    # -------------------------------------------------------------------------
    # Updates
    # -------------------------------------------------------------------------

    def update(self, auth_user: AuthUser, person_id: UUID, dto: PersonUpdate) -> PersonResponse:
        """
        Update one person.

        Raises:
            BadRequestError: If the person does not exist for the caller or
                the selected feature face does not belong to it
        """
        person = self.repository.get_by_id(auth_user.id, person_id)
        if not person:
            raise BadRequestError(f"Person {person_id} not found")

        return self._apply_update(auth_user, person, dto)

    def update_people(self, auth_user: AuthUser, dto: PeopleUpdate) -> List[BulkIdResponse]:
        """Update many people, reporting each outcome independently."""
        results: List[BulkIdResponse] = []

        for item in dto.people:
            try:
                person = self.repository.get_by_id(auth_user.id, item.id)
                if not person:
                    results.append(BulkIdResponse.failed(item.id, BulkIdErrorReason.NOT_FOUND))
                    continue

                self._apply_update(auth_user, person, item)
                results.append(BulkIdResponse.ok(item.id))

            except Exception as e:
                logger.warning(
                    f"Failed to update person {item.id}: {str(e)}",
                    extra={"user_id": str(auth_user.id)}
                )
                results.append(BulkIdResponse.failed(item.id, BulkIdErrorReason.UNKNOWN))

        return results

    def _apply_update(self, auth_user: AuthUser, person: Person, dto: PersonUpdate) -> PersonResponse:
        if dto.feature_face_asset_id is not None:
            return self._set_feature_face(person, dto.feature_face_asset_id)

        changes = dto.model_dump(exclude_unset=True, include=UPDATABLE_FIELDS)
        # name and is_hidden are not nullable; birth_date may be cleared
        changes = {
            field: value for field, value in changes.items()
            if value is not None or field == "birth_date"
        }

        if changes:
            person = self._update_or_fail(person.id, changes)

        if SEARCH_FIELDS & changes.keys():
            asset_ids = [asset.id for asset in self.repository.get_assets(auth_user.id, person.id)]
            if asset_ids:
                self.jobs.queue(JobItem(
                    name=JobName.SEARCH_INDEX_ASSET,
                    data=AssetIdsJob(ids=asset_ids)
                ))

        return map_person(person)

    def _set_feature_face(self, person: Person, asset_id: UUID) -> PersonResponse:
        face = self.repository.get_face_by_id(asset_id=asset_id, person_id=person.id)
        if not face:
            raise BadRequestError(f"Person {person.id} has no face on asset {asset_id}")

        person = self._update_or_fail(person.id, {"thumbnail_path": self.thumbnail_path_for(person)})

        self.jobs.queue(JobItem(
            name=JobName.GENERATE_PERSON_THUMBNAIL,
            data=FaceThumbnailJob(
                asset_id=face.asset_id,
                person_id=person.id,
                bounding_box=BoundingBox(
                    x1=face.bounding_box_x1,
                    x2=face.bounding_box_x2,
                    y1=face.bounding_box_y1,
                    y2=face.bounding_box_y2,
                ),
                image_width=face.image_width,
                image_height=face.image_height,
            )
        ))

        return map_person(person)

    def thumbnail_path_for(self, person: Person) -> str:
        """Storage key of the person's rendered thumbnail."""
        return f"{self.thumbnail_prefix}/{person.owner_id}/{person.id}.jpeg"

    # -------------------------------------------------------------------------
    # Merge
    # -------------------------------------------------------------------------

    def merge_person(
        self,
        auth_user: AuthUser,
        primary_id: UUID,
        dto: MergePersonRequest
    ) -> List[BulkIdResponse]:
        """
        Fold each secondary person into the primary person.

        Per id: conflicting faces are detached and dropped from search, the
        remaining faces move to the primary, then the secondary is deleted.

        Raises:
            BadRequestError: If the primary person does not exist
        """
        primary = self.repository.get_by_id(auth_user.id, primary_id)
        if not primary:
            raise BadRequestError(f"Person {primary_id} not found")

        results: List[BulkIdResponse] = []

        for merge_id in dto.ids:
            if merge_id == primary.id:
                results.append(BulkIdResponse.failed(merge_id, BulkIdErrorReason.DUPLICATE))
                continue

            try:
                secondary = self.repository.get_by_id(auth_user.id, merge_id)
                if not secondary:
                    results.append(BulkIdResponse.failed(merge_id, BulkIdErrorReason.NOT_FOUND))
                    continue

                logger.info(f"Merging {secondary.name or secondary.id} into {primary.name or primary.id}")

                conflicting = self.repository.prepare_reassign_faces(
                    old_person_id=merge_id,
                    new_person_id=primary.id
                )
                for asset_id in conflicting:
                    self.jobs.queue(JobItem(
                        name=JobName.SEARCH_REMOVE_FACE,
                        data=AssetFaceJob(asset_id=asset_id, person_id=merge_id)
                    ))

                self.repository.reassign_faces(old_person_id=merge_id, new_person_id=primary.id)
                self.repository.delete(secondary)

                results.append(BulkIdResponse.ok(merge_id))

            except Exception as e:
                logger.error(f"Unable to merge {merge_id} into {primary.id}: {str(e)}", exc_info=True)
                results.append(BulkIdResponse.failed(merge_id, BulkIdErrorReason.UNKNOWN))

        merged = sum(1 for r in results if r.success)
        logger.info(
            f"Merged {merged}/{len(results)} people into {primary.id}",
            extra={"user_id": str(auth_user.id), "primary_id": str(primary.id)}
        )
        return results

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    def handle_person_cleanup(self) -> int:
        """Delete people without faces across all owners.

        Thumbnails of deleted people are handed to a delete-files job.
        Returns the number of deleted people.
        """
        people = self.repository.get_all_without_faces()
        deleted = 0

        for person in people:
            # Attributes expire once the delete commits
            person_id, thumbnail_path = person.id, person.thumbnail_path
            logger.info(f"Deleting person without faces: {person_id}")
            try:
                self.repository.delete(person)
                deleted += 1
                if thumbnail_path:
                    self.jobs.queue(JobItem(
                        name=JobName.DELETE_FILES,
                        data=DeleteFilesJob(files=[thumbnail_path])
                    ))
            except Exception as e:
                logger.warning(f"Failed to delete person {person_id}: {str(e)}")
                continue

        return deleted

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _find_or_fail(self, auth_user: AuthUser, person_id: UUID) -> Person:
        person = self.repository.get_by_id(auth_user.id, person_id)
        if not person:
            raise NotFoundError(f"Person {person_id} not found")
        return person

    def _update_or_fail(self, person_id: UUID, changes) -> Person:
        person = self.repository.update(person_id, changes)
        if not person:
            raise NotFoundError(f"Person {person_id} no longer exists")
        return person
