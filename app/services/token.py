"""Attendance token business logic."""
from datetime import datetime
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.core.constants import TOKEN_CODE_MAX_ATTEMPTS
from app.core.exceptions import CodeGenerationError, NotFound, ValidationError
from app.core.utils import is_expired, make_token_code, to_timezone, to_utc
from app.db.models import Attendance, AttendanceToken
from app.services.utils import clean_label, get_event_or_raise, render_token_qr

logger = structlog.get_logger(__name__)

UTC = ZoneInfo("UTC")

# Sentinel so callers can clear a label by passing None explicitly
UNSET = object()


def serialize_token(token: AttendanceToken, tz: ZoneInfo = UTC, now: Optional[datetime] = None) -> Dict:
    """Token as returned by the API, with the derived ``expired`` flag."""
    return {
        "id": token.id,
        "event_id": token.event_id,
        "event_name": token.event.name if token.event else None,
        "code": token.code,
        "label": token.label,
        "qr_code": token.qr_code,
        "expires_at": to_timezone(token.expires_at, tz).isoformat(),
        "is_active": token.is_active,
        "expired": is_expired(token.expires_at, now),
        "created_at": to_timezone(token.created_at, tz).isoformat(),
    }


def _commit_with_fresh_code(db: Session, token: AttendanceToken, changes: Dict) -> AttendanceToken:
    """Assign a new code (and QR) to ``token`` and commit, retrying on code collisions.

    ``changes`` is re-applied on every attempt because a rollback reverts
    the pending attribute changes of a persistent token.
    """
    for _ in range(TOKEN_CODE_MAX_ATTEMPTS):
        for field, value in changes.items():
            setattr(token, field, value)
        token.code = make_token_code(settings.TOKEN_CODE_LENGTH)
        token.qr_code = render_token_qr(token.code, token.event_id)

        try:
            db.add(token)
            db.commit()
            db.refresh(token)
            return token
        except IntegrityError:
            db.rollback()
            logger.warning("token_code_collision", event_id=token.event_id)
            continue

    raise CodeGenerationError()


def create_token(
    db: Session,
    event_id: int,
    expires_at: datetime,
    label: Optional[str] = None
) -> AttendanceToken:
    """
    Issue a new attendance token for an event.

    An ``expires_at`` in the past is accepted; the token is then simply
    unusable from the start.

    Raises:
        NotFound: If the event does not exist (nothing is persisted)
        CodeGenerationError: If no unused code was found
    """
    if expires_at is None:
        raise ValidationError("expires_at is required")

    get_event_or_raise(db, event_id)

    token = AttendanceToken(event_id=event_id, is_active=True)
    token = _commit_with_fresh_code(db, token, {
        "label": clean_label(label),
        "expires_at": to_utc(expires_at),
    })

    logger.info(
        "token_created",
        token_id=token.id,
        event_id=event_id,
        label=token.label,
        expires_at=token.expires_at.isoformat(),
    )
    return token


def get_token(db: Session, token_id: int) -> AttendanceToken:
    token = db.query(AttendanceToken).options(
        joinedload(AttendanceToken.event)
    ).filter(AttendanceToken.id == token_id).first()
    if not token:
        raise NotFound("Token not found")
    return token


def regenerate_token(
    db: Session,
    token_id: int,
    expires_at: Optional[datetime] = None,
    label=UNSET
) -> AttendanceToken:
    """
    Rotate a token's code, optionally moving its expiry or relabelling it.

    The previous code stops resolving as soon as this commits. Expiry and
    label only change when the caller supplies them. A revoked token is
    reactivated, since regeneration opens a fresh validity window.

    Raises:
        NotFound: If the token does not exist
    """
    token = get_token(db, token_id)

    changes = {"is_active": True}
    if expires_at is not None:
        changes["expires_at"] = to_utc(expires_at)
    if label is not UNSET:
        changes["label"] = clean_label(label)

    token = _commit_with_fresh_code(db, token, changes)

    logger.info(
        "token_regenerated",
        token_id=token.id,
        event_id=token.event_id,
        expires_at=token.expires_at.isoformat(),
    )
    return token


def revoke_token(db: Session, token_id: int) -> AttendanceToken:
    """Deactivate a token without deleting it. Idempotent."""
    token = get_token(db, token_id)
    token.is_active = False
    db.commit()
    db.refresh(token)

    logger.info("token_revoked", token_id=token.id, event_id=token.event_id)
    return token


def delete_token(db: Session, token_id: int) -> None:
    """
    Delete a token.

    Attendance rows created with it are kept: their token reference is
    cleared and their label snapshot is left untouched.

    Raises:
        NotFound: If the token does not exist
    """
    token = get_token(db, token_id)

    detached = db.query(Attendance).filter(
        Attendance.token_id == token_id
    ).update({Attendance.token_id: None}, synchronize_session="fetch")

    db.delete(token)
    db.commit()

    logger.info("token_deleted", token_id=token_id, detached_attendances=detached)


def list_tokens(db: Session, event_id: Optional[int] = None, tz: ZoneInfo = UTC) -> List[Dict]:
    """List tokens newest first, optionally for one event."""
    query = db.query(AttendanceToken).options(joinedload(AttendanceToken.event))
    if event_id is not None:
        query = query.filter(AttendanceToken.event_id == event_id)

    tokens = query.order_by(AttendanceToken.created_at.desc(), AttendanceToken.id.desc()).all()
    return [serialize_token(token, tz) for token in tokens]
