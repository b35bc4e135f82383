"""Security and authentication utilities.

Login and token refresh live in the identity service; this module only mints
(for tooling and tests) and verifies the JWTs that carry the caller's id and
role into every attendance operation.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from fastapi import HTTPException, Request

from app.core import config


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated caller passed explicitly into service operations."""

    id: int
    role: str

    @property
    def is_manager(self) -> bool:
        return self.role in config.settings.MANAGER_ROLES


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if "sub" in to_encode:
        # PyJWT requires the subject claim to be a string
        to_encode["sub"] = str(to_encode["sub"])
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.settings.SECRET_KEY, algorithm=config.settings.ALGORITHM)
    return encoded_jwt


def _extract_bearer_token(request: Request) -> Optional[str]:
    """Read the JWT from the Authorization header, falling back to the cookie."""
    authorization = request.headers.get("Authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            return credentials.strip()
    return request.cookies.get("access_token")


def verify_access_token(request: Request) -> CurrentUser:
    """Verify JWT token from header or cookie and return the caller."""
    token = _extract_bearer_token(request)

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = jwt.decode(token, config.settings.SECRET_KEY, algorithms=[config.settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or not str(subject).isdigit() or not role:
        raise HTTPException(status_code=401, detail="Invalid token")

    return CurrentUser(id=int(subject), role=role)
