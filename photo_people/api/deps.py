"""Dependencies for API endpoints."""
from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from photo_people.db.base import get_db
from photo_people.repositories.person_repo import PersonRepository
from photo_people.schemas.auth import AuthUser
from photo_people.services.jobs import CeleryJobDispatcher, JobDispatcher
from photo_people.services.person_service import PersonService
from photo_people.services.storage.base import StorageRepository
from photo_people.services.storage.s3 import S3StorageRepository


async def get_current_user(request: Request) -> AuthUser:
    """Caller placed on ``request.state.user`` by the authentication layer."""
    user = getattr(request.state, "user", None)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if isinstance(user, AuthUser):
        return user
    return AuthUser.model_validate(user)


@lru_cache
def get_storage() -> StorageRepository:
    return S3StorageRepository()


@lru_cache
def get_job_dispatcher() -> JobDispatcher:
    return CeleryJobDispatcher()


def get_person_service(
    db: Session = Depends(get_db),
    storage: StorageRepository = Depends(get_storage),
    jobs: JobDispatcher = Depends(get_job_dispatcher)
) -> PersonService:
    return PersonService(PersonRepository(db), storage, jobs)
