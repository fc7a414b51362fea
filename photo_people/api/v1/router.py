from fastapi import APIRouter
from photo_people.api.v1.endpoints import persons


api_router = APIRouter()

api_router.include_router(persons.router, prefix="/person", tags=["person"])
