"""Pydantic schemas for request/response validation."""
from app.schemas.token import TokenCreate, TokenRegenerate, TokenResponse
from app.schemas.checkin import CheckinRequest, CheckinResponse
from app.schemas.attendance import (
    ManualAttendanceCreate,
    AttendanceUpdate,
    AttendanceResponse,
    AttendancePage,
    AttendanceSummary,
)
from app.schemas.common import ErrorResponse, ErrorDetail, PaginationMeta

__all__ = [
    "TokenCreate",
    "TokenRegenerate",
    "TokenResponse",
    "CheckinRequest",
    "CheckinResponse",
    "ManualAttendanceCreate",
    "AttendanceUpdate",
    "AttendanceResponse",
    "AttendancePage",
    "AttendanceSummary",
    "ErrorResponse",
    "ErrorDetail",
    "PaginationMeta",
]
