"""Main API router for v1."""
from fastapi import APIRouter

from edconsult.api.v1.endpoints import auth, counselors, leads, students, meetings
from edconsult.schemas import ErrorResponse

api_router = APIRouter(
    prefix="/api/v1",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(leads.public_router, tags=["Leads"])
api_router.include_router(leads.router, tags=["Leads"])
api_router.include_router(students.router, tags=["Students"])
api_router.include_router(counselors.router, tags=["Counselors"])
api_router.include_router(meetings.router, tags=["Meetings"])
