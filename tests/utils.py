from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import Session

from app.core.security import create_access_token
from app.core.utils import make_token_code
from app.db.models import Attendance, AttendanceToken, Event, User
from app.services.utils import render_token_qr


def make_user(
    session: Session,
    name: str = "Test Member",
    email: str = "member@example.org",
    role: str = "anggota",
    nim: Optional[str] = None,
) -> User:
    """Insert a member row the way the user service would."""
    user = User(name=name, email=email, role=role, nim=nim, is_active=True)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_event(session: Session, name: str = "Weekly Meeting", status: str = "upcoming") -> Event:
    event = Event(name=name, status=status, start_date=datetime.now(timezone.utc))
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


def make_token(
    session: Session,
    event: Event,
    code: Optional[str] = None,
    label: Optional[str] = None,
    expires_in: timedelta = timedelta(hours=1),
    is_active: bool = True,
) -> AttendanceToken:
    """Insert a token directly, bypassing code generation, so tests can pick the code."""
    code = code or make_token_code()
    token = AttendanceToken(
        event_id=event.id,
        code=code,
        label=label,
        qr_code=render_token_qr(code, event.id),
        expires_at=datetime.now(timezone.utc) + expires_in,
        is_active=is_active,
    )
    session.add(token)
    session.commit()
    session.refresh(token)
    return token


def count_attendance(session: Session, **filters) -> int:
    query = session.query(Attendance)
    for field, value in filters.items():
        query = query.filter(getattr(Attendance, field) == value)
    return query.count()


def auth_headers(user: User) -> dict:
    """Bearer header for a user, carrying their id and role."""
    token = create_access_token({"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}
