"""Student management utilities."""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import ConflictError, NotFoundError
from models.student import StudentModel

logger = logging.getLogger(__name__)


class StudentManager:
    """Manages student records. Students are created once and never edited."""

    def __init__(self, db: Session):
        self.db = db

    def create_student(
        self,
        first_name: str,
        last_name: str,
        email: str,
        matric_number: str,
        level: str,
        gender: str,
        images: Optional[List[str]] = None,
    ) -> StudentModel:
        """Register a new student.

        Raises:
            ConflictError: If the email or matric number is already registered.
        """
        if self.db.query(StudentModel).filter(StudentModel.email == email).first():
            raise ConflictError("Student already exist")
        if self.get_by_matric_number(matric_number) is not None:
            raise ConflictError("Student with this matric number already exist")

        model = StudentModel(
            first_name=first_name,
            last_name=last_name,
            email=email,
            matric_number=matric_number,
            level=level,
            gender=gender,
            images=list(images or []),
        )
        try:
            self.db.add(model)
            self.db.commit()
            self.db.refresh(model)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Student already exist") from e

        logger.info("Registered student: %s", matric_number)
        return model

    def get_by_matric_number(self, matric_number: str) -> Optional[StudentModel]:
        return (
            self.db.query(StudentModel)
            .filter(StudentModel.matric_number == matric_number)
            .first()
        )

    def get_student(self, matric_number: str) -> StudentModel:
        model = self.get_by_matric_number(matric_number)
        if model is None:
            raise NotFoundError("Student not found")
        return model

    def list_students(self) -> List[StudentModel]:
        return self.db.query(StudentModel).order_by(StudentModel.matric_number).all()
