"""User model.

Members are managed by the user-administration service; this table is the
read-only projection the attendance core needs for lookups and display names.
"""
from datetime import datetime, timezone as tz
from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    nim = Column(String(30), nullable=True)  # Student number
    role = Column(String(30), nullable=False, default="anggota")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    attendances = relationship("Attendance", back_populates="user", cascade="all, delete-orphan")
