"""Check-in schemas."""
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, field_validator

from app.core.sanitization import validate_token_payload


class CheckinRequest(BaseModel):
    # Bare code typed by the member, or the structured QR payload
    # (either as a JSON string or already decoded by the scanner)
    token: Union[str, Dict[str, Any]]

    @field_validator('token')
    @classmethod
    def validate_token_field(cls, v):
        """Reject empty or oversized payloads before any lookup."""
        if isinstance(v, str):
            return validate_token_payload(v)
        return v


class CheckinResponse(BaseModel):
    id: int
    user_id: int
    user_name: Optional[str] = None
    event_id: int
    event_name: Optional[str] = None
    token_id: Optional[int] = None
    token_label: Optional[str] = None
    status: str
    check_in_time: str
