"""Course management utilities.

Courses belong to the lecturer who created them. Update and delete filter on
both the course id and the owner id, so a non-owner gets the same NotFoundError
as a caller asking for a course that does not exist.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from core.exceptions import BadRequestError, NotFoundError
from models.course import CourseModel

logger = logging.getLogger(__name__)

COURSE_FIELDS = ("course_name", "course_code", "level", "day", "time")


class CourseManager:
    """Manages course records using SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        # Listings always show the owner's name
        return self.db.query(CourseModel).options(joinedload(CourseModel.lecturer))

    def create_course(
        self,
        lecturer_id: str,
        course_name: str,
        course_code: str,
        level: str,
        day: str,
        time: str,
    ) -> CourseModel:
        """Create a course owned by a lecturer.

        Args:
            lecturer_id: Owning lecturer's id.
            course_name: Display name.
            course_code: Unique course code.
            level: Academic level.
            day: Weekday the course is held.
            time: Free text schedule time.

        Returns:
            Created CourseModel.

        Raises:
            BadRequestError: If the course code is already taken.
        """
        model = CourseModel(
            course_name=course_name,
            course_code=course_code,
            level=level,
            day=day,
            time=time,
            lecturer_id=lecturer_id,
        )
        try:
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequestError(f"Course code '{course_code}' already exists") from e

        logger.info("Lecturer %s created course %s", lecturer_id, course_code)
        return self.get_course(model.course_id)

    def find_course(self, course_id: str) -> Optional[CourseModel]:
        return self._query().filter(CourseModel.course_id == course_id).first()

    def get_course(self, course_id: str) -> CourseModel:
        model = self.find_course(course_id)
        if model is None:
            raise NotFoundError("Course not found")
        return model

    def list_courses(self) -> List[CourseModel]:
        return self._query().order_by(CourseModel.course_code).all()

    def list_by_lecturer(self, lecturer_id: str) -> List[CourseModel]:
        models = (
            self._query()
            .filter(CourseModel.lecturer_id == lecturer_id)
            .order_by(CourseModel.course_code)
            .all()
        )
        if not models:
            raise NotFoundError("No courses by this lecturer")
        return models

    def list_by_level(self, level: str) -> List[CourseModel]:
        models = (
            self._query()
            .filter(CourseModel.level == level)
            .order_by(CourseModel.course_code)
            .all()
        )
        if not models:
            raise NotFoundError("No courses for this level")
        return models

    def update_course(
        self, course_id: str, lecturer_id: str, changes: Dict[str, Any]
    ) -> CourseModel:
        """Apply a partial update to a course owned by ``lecturer_id``.

        Raises:
            NotFoundError: If the course does not exist or is owned by someone else.
            BadRequestError: If the new course code is already taken.
        """
        values = {k: v for k, v in changes.items() if k in COURSE_FIELDS and v is not None}
        model = self._owned(course_id, lecturer_id, "edit")
        for key, value in values.items():
            setattr(model, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequestError(
                f"Course code '{values.get('course_code')}' already exists"
            ) from e

        logger.info("Lecturer %s updated course %s", lecturer_id, course_id)
        return self.get_course(course_id)

    def delete_course(self, course_id: str, lecturer_id: str) -> None:
        model = self._owned(course_id, lecturer_id, "delete")
        self.db.delete(model)
        self.db.commit()
        logger.info("Lecturer %s deleted course %s", lecturer_id, course_id)

    def _owned(self, course_id: str, lecturer_id: str, action: str) -> CourseModel:
        model = (
            self.db.query(CourseModel)
            .filter(
                CourseModel.course_id == course_id,
                CourseModel.lecturer_id == lecturer_id,
            )
            .first()
        )
        if model is None:
            raise NotFoundError(
                f"Course not found or you're not authorized to {action} this course"
            )
        return model
