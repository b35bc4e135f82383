"""Attendance record endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, require_manager, TIMEZONE
from app.core.config import settings
from app.core.exceptions import Forbidden
from app.core.rate_limit import limiter, RATE_LIMITS
from app.core.security import CurrentUser
from app.schemas import (
    AttendancePage,
    AttendanceResponse,
    AttendanceSummary,
    AttendanceUpdate,
    ManualAttendanceCreate,
)
from app.schemas.attendance import AttendanceStatus
from app.services.attendance import (
    create_manual_attendance,
    delete_attendance,
    get_attendance_summary,
    list_attendance,
    list_session_labels,
    serialize_attendance,
    update_attendance,
)

router = APIRouter()


def _page_size(limit: Optional[int]) -> int:
    if limit is None:
        return settings.DEFAULT_PAGE_SIZE
    return min(limit, settings.MAX_PAGE_SIZE)


@router.get("", response_model=AttendancePage)
async def list_attendance_endpoint(
    user_id: Optional[int] = Query(None, gt=0),
    event_id: Optional[int] = Query(None, gt=0),
    label: Optional[str] = Query(None, max_length=100),
    status: Optional[AttendanceStatus] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user)
):
    """
    List attendance records with server-side filtering and pagination.

    Members may only list their own records (``user_id`` equal to their
    own id); managers may filter by any user, event, session label or status.
    """
    if not user.is_manager and user_id != user.id:
        raise Forbidden("Members can only view their own attendance")

    return list_attendance(
        db,
        user_id=user_id,
        event_id=event_id,
        label=label,
        status=status,
        page=page,
        limit=_page_size(limit),
        tz=TIMEZONE,
    )


@router.get("/me", response_model=AttendancePage)
async def my_attendance_endpoint(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user)
):
    """The caller's own attendance history."""
    return list_attendance(db, user_id=user.id, page=page, limit=_page_size(limit), tz=TIMEZONE)


@router.get("/labels", response_model=List[str], dependencies=[Depends(require_manager)])
async def list_labels_endpoint(
    event_id: int = Query(..., gt=0),
    db: Session = Depends(get_db)
):
    """Distinct session labels recorded for an event (for the session filter)."""
    return list_session_labels(db, event_id)


@router.get("/summary", response_model=AttendanceSummary, dependencies=[Depends(require_manager)])
async def attendance_summary_endpoint(
    event_id: int = Query(..., gt=0),
    label: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db)
):
    """Head count per status for an event, optionally for one session."""
    return get_attendance_summary(db, event_id, label=label)


@router.post(
    "/manual",
    response_model=AttendanceResponse,
    status_code=201,
    dependencies=[Depends(require_manager)],
)
@limiter.limit(RATE_LIMITS["manager_write"])
async def create_manual_attendance_endpoint(
    request: Request,
    entry: ManualAttendanceCreate,
    db: Session = Depends(get_db)
):
    """
    Record attendance for a member without a token (manager only).

    Any status is allowed (present, excused, sick, absent) and the label is
    free text. Manual entries never count against a token's one-check-in rule.
    """
    attendance = create_manual_attendance(
        db,
        user_id=entry.user_id,
        event_id=entry.event_id,
        status=entry.status,
        label=entry.label,
        note=entry.note,
        check_in_time=entry.check_in_time,
    )
    return serialize_attendance(attendance, TIMEZONE)


@router.put("/{attendance_id}", response_model=AttendanceResponse, dependencies=[Depends(require_manager)])
async def update_attendance_endpoint(
    attendance_id: int,
    changes: AttendanceUpdate,
    db: Session = Depends(get_db)
):
    """Update status, label, note or check-in time of any record (manager only)."""
    fields = changes.model_dump(exclude_unset=True)
    if "label" in fields:
        fields["token_label"] = fields.pop("label")

    attendance = update_attendance(db, attendance_id, **fields)
    return serialize_attendance(attendance, TIMEZONE)


@router.delete("/{attendance_id}", status_code=204, dependencies=[Depends(require_manager)])
async def delete_attendance_endpoint(attendance_id: int, db: Session = Depends(get_db)):
    """Delete any attendance record (manager only)."""
    delete_attendance(db, attendance_id)
    return Response(status_code=204)
