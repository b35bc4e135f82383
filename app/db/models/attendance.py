"""Attendance model."""
from datetime import datetime, timezone as tz
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base import Base


class Attendance(Base):
    __tablename__ = "attendances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    # Back-reference only; NULL for manual entries and after the token is deleted
    token_id = Column(Integer, ForeignKey("attendance_tokens.id", ondelete="SET NULL"), nullable=True)
    # Snapshot of the token label at check-in time
    token_label = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="present")
    check_in_time = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(tz.utc),
        onupdate=lambda: datetime.now(tz.utc),
    )

    # Relationships
    user = relationship("User", back_populates="attendances")
    event = relationship("Event", back_populates="attendances")

    __table_args__ = (
        Index("idx_attendances_event", "event_id"),
        Index("idx_attendances_user", "user_id"),
        # NULL token_id never collides, so manual entries are unconstrained
        UniqueConstraint("user_id", "event_id", "token_id", name="uq_attendance_user_event_token"),
    )
