"""General utility functions."""
import math
import secrets
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.constants import TOKEN_CODE_ALPHABET, TOKEN_CODE_LENGTH


def make_token_code(length: int = TOKEN_CODE_LENGTH) -> str:
    """Generate a short, human-typeable attendance code."""
    return "".join(secrets.choice(TOKEN_CODE_ALPHABET) for _ in range(length))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def is_token_usable(is_active: bool, expires_at: datetime, now: Optional[datetime] = None) -> bool:
    """
    Check if a token currently grants check-in rights.

    Args:
        is_active: Whether the token has been revoked
        expires_at: Token expiry (timezone-aware or naive, assumed UTC if naive)
        now: Optional current time for testing (defaults to now)

    Returns:
        bool: True while the token is active and strictly before its expiry
    """
    if now is None:
        now = utcnow()
    return bool(is_active) and to_utc(now) < to_utc(expires_at)


def is_expired(expires_at: datetime, now: Optional[datetime] = None) -> bool:
    if now is None:
        now = utcnow()
    return to_utc(now) >= to_utc(expires_at)


def total_pages(total: int, limit: int) -> int:
    """Number of pages for a result set; an empty set still has one page."""
    return max(1, math.ceil(total / limit))


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_timezone(dt: datetime, tz: ZoneInfo) -> datetime:
    """Convert datetime to specified timezone."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)
