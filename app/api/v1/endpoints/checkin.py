"""Check-in endpoint."""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_current_user, TIMEZONE
from app.core.rate_limit import limiter, RATE_LIMITS
from app.core.security import CurrentUser
from app.schemas import CheckinRequest, CheckinResponse
from app.services.checkin import checkin

router = APIRouter()


@router.post("", response_model=CheckinResponse)
@limiter.limit(RATE_LIMITS["check_in"])
async def checkin_endpoint(
    request: Request,
    checkin_request: CheckinRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user)
):
    """
    Record the caller's attendance with a scanned or typed token.

    Args:
        request: FastAPI Request (for rate limiting)
        checkin_request: CheckinRequest with the token payload
        db: Database session (injected)
        user: Authenticated caller (injected)

    Returns:
        CheckinResponse with the created record, event name and session label

    Example:
        Request (typed code):
            POST /api/v1/checkin
            {"token": "K7QH2M"}

        Request (scanned QR, forwarded verbatim):
            POST /api/v1/checkin
            {"token": "{\\"token\\":\\"K7QH2M\\",\\"event_id\\":3}"}

        Response (200):
            {
                "id": 41,
                "user_id": 12,
                "user_name": "Siti Rahma",
                "event_id": 3,
                "event_name": "Weekly Meeting",
                "token_id": 7,
                "token_label": "Meeting 1",
                "status": "present",
                "check_in_time": "2026-10-18T18:05:12+07:00"
            }

        Response (404, unknown or expired code):
            {
                "success": false,
                "error": {"code": "token_expired", "message": "Token is not valid or has expired"}
            }

        Response (409, second scan of the same token):
            {
                "success": false,
                "error": {"code": "already_checked_in", "message": "You have already checked in with this token"}
            }

    Rate Limit:
        200 requests per minute per IP
    """
    return checkin(db, user.id, checkin_request.token, tz=TIMEZONE)
