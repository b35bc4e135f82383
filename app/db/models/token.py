"""Attendance token model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base


class AttendanceToken(Base):
    __tablename__ = "attendance_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    code = Column(String(32), unique=True, nullable=False, index=True)
    label = Column(String(100), nullable=True)  # Identifies the session within a recurring event
    qr_code = Column(Text, nullable=False)  # SVG data URI
    expires_at = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(tz.utc),
        onupdate=lambda: datetime.now(tz.utc),
    )

    # Relationships
    event = relationship("Event", back_populates="tokens")

    __table_args__ = (Index("idx_attendance_tokens_event", "event_id"),)
