"""Database models."""
from app.db.models.user import User
from app.db.models.event import Event
from app.db.models.token import AttendanceToken
from app.db.models.attendance import Attendance

__all__ = ["User", "Event", "AttendanceToken", "Attendance"]
