"""Shared API dependencies."""
from zoneinfo import ZoneInfo
from fastapi import Depends

from app.db import get_db
from app.core.config import settings
from app.core.exceptions import Forbidden
from app.core.security import CurrentUser, verify_access_token

# Timezone configuration
TIMEZONE = ZoneInfo(settings.TIMEZONE)


def get_current_user(user: CurrentUser = Depends(verify_access_token)) -> CurrentUser:
    """Authenticated caller (any role)."""
    return user


def require_manager(user: CurrentUser = Depends(verify_access_token)) -> CurrentUser:
    """Authenticated caller holding a manager role."""
    if not user.is_manager:
        raise Forbidden("Manager role required")
    return user


__all__ = ["get_db", "get_current_user", "require_manager", "TIMEZONE"]
