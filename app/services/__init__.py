from .attendance import (
    create_manual_attendance,
    delete_attendance,
    get_attendance,
    get_attendance_summary,
    list_attendance,
    list_session_labels,
    serialize_attendance,
    update_attendance,
)
from .checkin import checkin, extract_token_code
from .token import (
    create_token,
    delete_token,
    get_token,
    list_tokens,
    regenerate_token,
    revoke_token,
    serialize_token,
)
from .utils import generate_qr_code, render_token_qr

__all__ = [
    # checkin
    "checkin",
    "extract_token_code",
    # tokens
    "create_token",
    "delete_token",
    "get_token",
    "list_tokens",
    "regenerate_token",
    "revoke_token",
    "serialize_token",
    # attendance
    "create_manual_attendance",
    "delete_attendance",
    "get_attendance",
    "get_attendance_summary",
    "list_attendance",
    "list_session_labels",
    "serialize_attendance",
    "update_attendance",
    # utils
    "generate_qr_code",
    "render_token_qr",
]
