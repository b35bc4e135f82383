"""Main API router for v1."""
from fastapi import APIRouter

from app.api.v1.endpoints import attendance, checkin, tokens

api_router = APIRouter(prefix="/api/v1")

# Include all endpoint routers
api_router.include_router(tokens.router, prefix="/tokens", tags=["Attendance Tokens"])
api_router.include_router(checkin.router, prefix="/checkin", tags=["Check-in"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["Attendance"])
