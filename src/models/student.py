"""Student database model."""

import uuid

from sqlalchemy import JSON, Column, String

from .base import Base


class StudentModel(Base):
    __tablename__ = "students"

    student_id = Column(
        String, primary_key=True, index=True, default=lambda: str(uuid.uuid4())
    )
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    matric_number = Column(String(8), unique=True, index=True, nullable=False)
    level = Column(String, nullable=False)  # '100' through '500'
    gender = Column(String, nullable=False)
    images = Column(JSON, default=list)  # opaque image references, never processed
