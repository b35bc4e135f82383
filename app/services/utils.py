"""Shared utilities for service layer."""
import base64
import io
import json
from typing import Optional

import qrcode
from qrcode.image.svg import SvgPathImage
from sqlalchemy.orm import Session

from app.core.exceptions import NotFound, ValidationError
from app.core.sanitization import sanitize_label, sanitize_note
from app.db.models import Attendance, AttendanceToken, Event, User


def generate_qr_code(data: str) -> io.BytesIO:
    """Generate a QR code as a BytesIO object.

    Args:
        data: The data to encode in the QR code

    Returns:
        io.BytesIO: A BytesIO object containing the QR code image in SVG format
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(image_factory=SvgPathImage)
    buffer = io.BytesIO()
    img.save(buffer)
    buffer.seek(0)
    return buffer


def build_qr_payload(code: str, event_id: int) -> str:
    """Structured payload embedded in the QR code; scanners send it back verbatim."""
    return json.dumps({"token": code, "event_id": event_id}, separators=(",", ":"))


def render_token_qr(code: str, event_id: int) -> str:
    """Render a token's QR code as an SVG data URI for direct use in <img src>."""
    svg = generate_qr_code(build_qr_payload(code, event_id)).getvalue()
    return "data:image/svg+xml;base64," + base64.b64encode(svg).decode("ascii")


def get_event_or_raise(db: Session, event_id: int) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFound("Event not found")
    return event


def get_user_or_raise(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def get_token_by_code(db: Session, code: str) -> Optional[AttendanceToken]:
    """Look up a token by its secret code (unique, indexed)."""
    return db.query(AttendanceToken).filter(AttendanceToken.code == code).first()


def find_token_checkin(
    db: Session,
    user_id: int,
    event_id: int,
    token_id: int
) -> Optional[Attendance]:
    """
    Get the attendance row a user created by checking in with a token.

    Args:
        db: Database session
        user_id: Member who checked in
        event_id: Event the token belongs to
        token_id: Token used for the check-in

    Returns:
        Attendance record if found, None otherwise
    """
    return db.query(Attendance).filter(
        Attendance.user_id == user_id,
        Attendance.event_id == event_id,
        Attendance.token_id == token_id
    ).first()


def clean_label(label: Optional[str]) -> Optional[str]:
    """Sanitize a session label, reporting bad input as a domain validation error."""
    try:
        return sanitize_label(label)
    except ValueError as e:
        raise ValidationError(str(e))


def clean_note(note: Optional[str]) -> Optional[str]:
    try:
        return sanitize_note(note)
    except ValueError as e:
        raise ValidationError(str(e))
