"""Course database model."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .base import Base


class CourseModel(Base):
    __tablename__ = "courses"

    course_id = Column(
        String, primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    course_name = Column(String(100), nullable=False)
    course_code = Column(String(10), unique=True, index=True, nullable=False)
    level = Column(String, index=True, nullable=False)
    day = Column(String, nullable=False)  # Monday - Friday
    time = Column(String, nullable=False)
    lecturer_id = Column(
        String,
        ForeignKey("lecturers.lecturer_id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    create_at = Column(DateTime(timezone=True), server_default=func.now())
    update_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    lecturer = relationship("LecturerModel", back_populates="courses")
