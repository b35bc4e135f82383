"""Attendance schemas."""
from datetime import datetime
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from app.core.sanitization import MAX_LABEL_LENGTH, MAX_NOTE_LENGTH, sanitize_label, sanitize_note
from app.schemas.common import PaginationMeta

AttendanceStatus = Literal["present", "excused", "sick", "absent"]


class ManualAttendanceCreate(BaseModel):
    user_id: int = Field(..., gt=0)
    event_id: int = Field(..., gt=0)
    status: AttendanceStatus
    label: Optional[str] = Field(None, max_length=MAX_LABEL_LENGTH)
    note: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)
    check_in_time: Optional[datetime] = None

    @field_validator('label')
    @classmethod
    def sanitize_label_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_label(v)

    @field_validator('note')
    @classmethod
    def sanitize_note_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_note(v)


class AttendanceUpdate(BaseModel):
    """Partial update; only fields present in the request body are changed."""
    status: Optional[AttendanceStatus] = None
    label: Optional[str] = Field(None, max_length=MAX_LABEL_LENGTH)
    note: Optional[str] = Field(None, max_length=MAX_NOTE_LENGTH)
    check_in_time: Optional[datetime] = None

    @field_validator('label')
    @classmethod
    def sanitize_label_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_label(v)

    @field_validator('note')
    @classmethod
    def sanitize_note_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_note(v)


class AttendanceResponse(BaseModel):
    id: int
    user_id: int
    user_name: Optional[str] = None
    user_nim: Optional[str] = None
    event_id: int
    event_name: Optional[str] = None
    token_id: Optional[int] = None
    token_label: Optional[str] = None
    status: str
    check_in_time: str
    note: Optional[str] = None
    created_at: str
    updated_at: str


class AttendancePage(BaseModel):
    items: List[AttendanceResponse]
    meta: PaginationMeta


class AttendanceSummary(BaseModel):
    event_id: int
    event_name: str
    label: Optional[str] = None
    counts: Dict[str, int]
    total: int
