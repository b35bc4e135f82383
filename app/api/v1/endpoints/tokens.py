"""Attendance token endpoints (manager only)."""
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_manager, TIMEZONE
from app.core.rate_limit import limiter, RATE_LIMITS
from app.schemas import TokenCreate, TokenRegenerate, TokenResponse
from app.services.token import (
    UNSET,
    create_token,
    delete_token,
    get_token,
    list_tokens,
    regenerate_token,
    revoke_token,
    serialize_token,
)

router = APIRouter(dependencies=[Depends(require_manager)])


@router.post("", response_model=TokenResponse, status_code=201)
@limiter.limit(RATE_LIMITS["manager_write"])
async def create_token_endpoint(
    request: Request,
    token_request: TokenCreate,
    db: Session = Depends(get_db)
):
    """
    Issue an attendance token for an event.

    Generates a short manual-entry code plus a QR code (SVG data URI)
    embedding ``{"token": code, "event_id": id}``. An ``expires_at`` in the
    past is accepted and yields a token that is unusable from the start.

    Example:
        Request:
            POST /api/v1/tokens
            {
                "event_id": 3,
                "label": "Meeting 1",
                "expires_at": "2026-10-18T12:00:00Z"
            }

        Response (201):
            {
                "id": 7,
                "event_id": 3,
                "event_name": "Weekly Meeting",
                "code": "K7QH2M",
                "label": "Meeting 1",
                "qr_code": "data:image/svg+xml;base64,...",
                "expires_at": "2026-10-18T19:00:00+07:00",
                "is_active": true,
                "expired": false,
                "created_at": "..."
            }

        Response (404):
            {
                "success": false,
                "error": {"code": "not_found", "message": "Event not found"}
            }
    """
    token = create_token(
        db,
        event_id=token_request.event_id,
        expires_at=token_request.expires_at,
        label=token_request.label,
    )
    return serialize_token(token, TIMEZONE)


@router.get("", response_model=List[TokenResponse])
async def list_tokens_endpoint(
    event_id: Optional[int] = Query(None, gt=0),
    db: Session = Depends(get_db)
):
    """List tokens, newest first, each flagged ``expired`` when past its expiry."""
    return list_tokens(db, event_id=event_id, tz=TIMEZONE)


@router.get("/{token_id}", response_model=TokenResponse)
async def get_token_endpoint(token_id: int, db: Session = Depends(get_db)):
    return serialize_token(get_token(db, token_id), TIMEZONE)


@router.post("/{token_id}/regenerate", response_model=TokenResponse)
@limiter.limit(RATE_LIMITS["manager_write"])
async def regenerate_token_endpoint(
    request: Request,
    token_id: int,
    overrides: Optional[TokenRegenerate] = Body(None),
    db: Session = Depends(get_db)
):
    """
    Rotate a token's code and QR.

    The old code is rejected immediately afterwards. ``expires_at`` and
    ``label`` are only changed when present in the body; an empty body keeps
    both as they are.
    """
    expires_at = None
    label = UNSET
    if overrides is not None:
        expires_at = overrides.expires_at
        if "label" in overrides.model_fields_set:
            label = overrides.label

    token = regenerate_token(db, token_id, expires_at=expires_at, label=label)
    return serialize_token(token, TIMEZONE)


@router.post("/{token_id}/revoke", response_model=TokenResponse)
async def revoke_token_endpoint(token_id: int, db: Session = Depends(get_db)):
    """Deactivate a token; check-ins with its code fail from now on."""
    return serialize_token(revoke_token(db, token_id), TIMEZONE)


@router.delete("/{token_id}", status_code=204)
async def delete_token_endpoint(token_id: int, db: Session = Depends(get_db)):
    """Delete a token. Attendance already recorded with it is kept."""
    delete_token(db, token_id)
    return Response(status_code=204)
