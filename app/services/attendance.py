"""Attendance record business logic (manager path and reporting queries)."""
from datetime import datetime
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.constants import ATTENDANCE_STATUSES
from app.core.exceptions import NotFound, ValidationError
from app.core.utils import to_timezone, to_utc, total_pages, utcnow
from app.db.models import Attendance
from app.services.utils import clean_label, clean_note, get_event_or_raise, get_user_or_raise

logger = structlog.get_logger(__name__)

UTC = ZoneInfo("UTC")

# Fields a manager may change on an existing record
UPDATABLE_FIELDS = ("status", "token_label", "note", "check_in_time")


def serialize_attendance(attendance: Attendance, tz: ZoneInfo = UTC) -> Dict:
    """Attendance record with denormalized display fields."""
    user = attendance.user
    event = attendance.event
    return {
        "id": attendance.id,
        "user_id": attendance.user_id,
        "user_name": user.name if user else None,
        "user_nim": user.nim if user else None,
        "event_id": attendance.event_id,
        "event_name": event.name if event else None,
        "token_id": attendance.token_id,
        "token_label": attendance.token_label,
        "status": attendance.status,
        "check_in_time": to_timezone(attendance.check_in_time, tz).isoformat(),
        "note": attendance.note,
        "created_at": to_timezone(attendance.created_at, tz).isoformat(),
        "updated_at": to_timezone(attendance.updated_at, tz).isoformat(),
    }


def _validate_status(status: str) -> str:
    if status not in ATTENDANCE_STATUSES:
        raise ValidationError(
            f"Invalid status '{status}'. Must be one of: {', '.join(ATTENDANCE_STATUSES)}"
        )
    return status


def get_attendance(db: Session, attendance_id: int) -> Attendance:
    attendance = db.query(Attendance).options(
        joinedload(Attendance.user),
        joinedload(Attendance.event),
    ).filter(Attendance.id == attendance_id).first()
    if not attendance:
        raise NotFound("Attendance record not found")
    return attendance


def create_manual_attendance(
    db: Session,
    user_id: int,
    event_id: int,
    status: str,
    label: Optional[str] = None,
    note: Optional[str] = None,
    check_in_time: Optional[datetime] = None
) -> Attendance:
    """
    Record attendance on a member's behalf without a token.

    No token is resolved and the label is free text, so manual rows never
    collide with token check-ins.

    Raises:
        NotFound: If the user or event does not exist
        ValidationError: If status is not a known attendance status
    """
    _validate_status(status)
    get_user_or_raise(db, user_id)
    get_event_or_raise(db, event_id)

    attendance = Attendance(
        user_id=user_id,
        event_id=event_id,
        token_id=None,
        token_label=clean_label(label),
        status=status,
        note=clean_note(note),
        check_in_time=to_utc(check_in_time) if check_in_time else utcnow(),
    )
    db.add(attendance)
    db.commit()
    db.refresh(attendance)

    logger.info(
        "attendance_created_manually",
        attendance_id=attendance.id,
        user_id=user_id,
        event_id=event_id,
        status=status,
    )
    return attendance


def update_attendance(db: Session, attendance_id: int, **fields) -> Attendance:
    """
    Update status, label, note or check-in time of any attendance record.

    Only keys present in ``fields`` are changed; token and ownership
    references are never rewritten.

    Raises:
        NotFound: If the record does not exist
        ValidationError: If an unknown field or status is supplied
    """
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

    attendance = get_attendance(db, attendance_id)

    if "status" in fields:
        attendance.status = _validate_status(fields["status"])
    if "token_label" in fields:
        attendance.token_label = clean_label(fields["token_label"])
    if "note" in fields:
        attendance.note = clean_note(fields["note"])
    if "check_in_time" in fields:
        if fields["check_in_time"] is None:
            raise ValidationError("check_in_time cannot be empty")
        attendance.check_in_time = to_utc(fields["check_in_time"])

    db.commit()
    db.refresh(attendance)

    logger.info("attendance_updated", attendance_id=attendance_id, fields=sorted(fields))
    return attendance


def delete_attendance(db: Session, attendance_id: int) -> None:
    attendance = get_attendance(db, attendance_id)
    db.delete(attendance)
    db.commit()

    logger.info("attendance_deleted", attendance_id=attendance_id)


def list_attendance(
    db: Session,
    user_id: Optional[int] = None,
    event_id: Optional[int] = None,
    label: Optional[str] = None,
    status: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
    tz: ZoneInfo = UTC
) -> Dict:
    """
    Filtered, paginated attendance records, newest check-in first.

    Filtering and slicing happen in the query, so ``meta.total`` counts the
    filtered set rather than the whole event.

    Returns:
        dict with ``items`` (serialized records) and ``meta``
        (page, limit, total, total_pages)
    """
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be positive")
    if status is not None:
        _validate_status(status)

    query = db.query(Attendance)
    if user_id is not None:
        query = query.filter(Attendance.user_id == user_id)
    if event_id is not None:
        query = query.filter(Attendance.event_id == event_id)
    if label is not None:
        query = query.filter(Attendance.token_label == label)
    if status is not None:
        query = query.filter(Attendance.status == status)

    total = query.count()

    records = query.options(
        joinedload(Attendance.user),
        joinedload(Attendance.event),
    ).order_by(
        Attendance.check_in_time.desc(), Attendance.id.desc()
    ).offset((page - 1) * limit).limit(limit).all()

    return {
        "items": [serialize_attendance(record, tz) for record in records],
        "meta": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": total_pages(total, limit),
        },
    }


def list_session_labels(db: Session, event_id: int) -> List[str]:
    """Distinct session labels recorded for an event, sorted."""
    get_event_or_raise(db, event_id)

    rows = db.query(Attendance.token_label).filter(
        Attendance.event_id == event_id,
        Attendance.token_label.isnot(None),
        Attendance.token_label != "",
    ).distinct().order_by(Attendance.token_label).all()

    return [label for (label,) in rows]


def get_attendance_summary(db: Session, event_id: int, label: Optional[str] = None) -> Dict:
    """Per-status head counts for an event (optionally one session)."""
    event = get_event_or_raise(db, event_id)

    query = db.query(Attendance.status, func.count(Attendance.id)).filter(
        Attendance.event_id == event_id
    )
    if label is not None:
        query = query.filter(Attendance.token_label == label)

    counts = {status: 0 for status in ATTENDANCE_STATUSES}
    for status, count in query.group_by(Attendance.status).all():
        counts[status] = count

    return {
        "event_id": event.id,
        "event_name": event.name,
        "label": label,
        "counts": counts,
        "total": sum(counts.values()),
    }
