"""Check-in business logic."""
import json
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union
from zoneinfo import ZoneInfo

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.constants import STATUS_PRESENT
from app.core.exceptions import AlreadyCheckedIn, TokenExpired, TokenInvalid
from app.core.sanitization import normalize_token_code
from app.core.utils import is_token_usable, to_utc, utcnow
from app.db.models import Attendance
from app.services.attendance import serialize_attendance
from app.services.utils import find_token_checkin, get_token_by_code, get_user_or_raise

logger = structlog.get_logger(__name__)

UTC = ZoneInfo("UTC")


def _looks_like_json_object(text: str) -> bool:
    return text.startswith("{") and text.endswith("}")


def _structured_token(raw: str) -> Optional[Any]:
    """The ``token`` field of a JSON-object payload, or None for anything else."""
    if not _looks_like_json_object(raw):
        return None
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        # Brace-wrapped but not JSON: treated like a typed code
        return None
    return decoded.get("token") if isinstance(decoded, dict) else None


def extract_token_code(payload: Union[str, Mapping[str, Any]]) -> str:
    """
    Pull the token code out of a check-in payload.

    The check-in entry point serves both camera scans and typed codes:

    - structured payload (a mapping, or a string holding a JSON object) with
      a ``token`` field: that field is the code;
    - anything else: the raw input is the code.

    A structured payload without a usable ``token`` field falls back to the
    raw input. The result is normalized but not validated against the
    database.

    Raises:
        TokenInvalid: If no well-formed code can be derived
    """
    if isinstance(payload, Mapping):
        candidate = payload.get("token")
        raw = json.dumps(dict(payload))
    else:
        raw = str(payload).strip()
        candidate = _structured_token(raw)

    code = candidate if isinstance(candidate, str) and candidate.strip() else raw

    try:
        return normalize_token_code(code)
    except ValueError:
        raise TokenInvalid()


def checkin(
    db: Session,
    user_id: int,
    payload: Union[str, Mapping[str, Any]],
    now: Optional[datetime] = None,
    tz: ZoneInfo = UTC
) -> Dict:
    """Check a member in with a scanned or typed token.

    Args:
        db: SQLAlchemy session
        user_id: Authenticated caller checking in
        payload: Raw code or structured QR payload
        now: Optional current time for testing (defaults to now)
        tz: Display timezone for the returned timestamps

    Returns:
        dict: The created attendance record, with event name and token label

    Raises:
        NotFound: If the caller has no user record
        TokenInvalid: If the code does not resolve to a token
        TokenExpired: If the token is revoked or past its expiry
        AlreadyCheckedIn: If the caller already checked in with this token,
                          including when a concurrent request won the race
    """
    now = to_utc(now) if now is not None else utcnow()
    user = get_user_or_raise(db, user_id)

    try:
        code = extract_token_code(payload)
    except TokenInvalid:
        logger.info("checkin_rejected", reason="token_malformed", user_id=user_id)
        raise

    token = get_token_by_code(db, code)
    if not token:
        logger.info("checkin_rejected", reason="token_invalid", user_id=user_id)
        raise TokenInvalid()

    if not is_token_usable(token.is_active, token.expires_at, now):
        logger.info(
            "checkin_rejected",
            reason="token_revoked" if not token.is_active else "token_expired",
            user_id=user_id,
            token_id=token.id,
            event_id=token.event_id,
        )
        raise TokenExpired()

    if find_token_checkin(db, user_id, token.event_id, token.id):
        logger.info(
            "checkin_rejected",
            reason="already_checked_in",
            user_id=user_id,
            token_id=token.id,
            event_id=token.event_id,
        )
        raise AlreadyCheckedIn()

    attendance = Attendance(
        user_id=user_id,
        event_id=token.event_id,
        token_id=token.id,
        token_label=token.label,
        status=STATUS_PRESENT,
        check_in_time=now,
    )

    try:
        db.add(attendance)
        db.commit()
    except IntegrityError:
        # The unique constraint caught a concurrent check-in for the same token
        db.rollback()
        logger.info(
            "checkin_rejected",
            reason="already_checked_in_race",
            user_id=user_id,
            token_id=token.id,
            event_id=token.event_id,
        )
        raise AlreadyCheckedIn()

    db.refresh(attendance)

    logger.info(
        "checkin_recorded",
        attendance_id=attendance.id,
        user_id=user.id,
        token_id=attendance.token_id,
        event_id=attendance.event_id,
        token_label=attendance.token_label,
    )
    return serialize_attendance(attendance, tz)
