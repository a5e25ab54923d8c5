"""Lecturer database model.

This module defines the Lecturer database model using SQLAlchemy.
"""

import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base


class LecturerModel(Base):
    """Lecturer database model."""

    __tablename__ = "lecturers"

    lecturer_id = Column(
        String, primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # Password reset code; both columns are null unless a reset is pending
    otp = Column(String, index=True, nullable=True)
    otp_expires_at = Column(DateTime(timezone=True), nullable=True)

    create_at = Column(DateTime(timezone=True), server_default=func.now())
    update_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    courses = relationship(
        "CourseModel",
        back_populates="lecturer",
        cascade="all, delete-orphan",
    )
