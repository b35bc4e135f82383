"""Attendance token schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from app.core.sanitization import MAX_LABEL_LENGTH, sanitize_label


class TokenCreate(BaseModel):
    event_id: int = Field(..., gt=0)
    label: Optional[str] = Field(None, max_length=MAX_LABEL_LENGTH)
    expires_at: datetime

    @field_validator('label')
    @classmethod
    def sanitize_label_field(cls, v: Optional[str]) -> Optional[str]:
        """Sanitize session label."""
        return sanitize_label(v)


class TokenRegenerate(BaseModel):
    """Optional overrides applied while rotating the code."""
    expires_at: Optional[datetime] = None
    label: Optional[str] = Field(None, max_length=MAX_LABEL_LENGTH)

    @field_validator('label')
    @classmethod
    def sanitize_label_field(cls, v: Optional[str]) -> Optional[str]:
        return sanitize_label(v)


class TokenResponse(BaseModel):
    id: int
    event_id: int
    event_name: Optional[str] = None
    code: str
    label: Optional[str] = None
    qr_code: str
    expires_at: str
    is_active: bool
    expired: bool
    created_at: str
