"""Course schema definitions."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from models.course import CourseModel
from schemas.common import CamelModel, Level, Weekday


class CreateCourseRequest(CamelModel):
    course_name: str = Field(min_length=5, max_length=100)
    course_code: str = Field(min_length=6, max_length=10)
    level: Level
    day: Weekday
    time: str = Field(min_length=1)


class UpdateCourseRequest(CamelModel):
    """Partial update; omitted fields keep their stored value."""

    course_name: Optional[str] = Field(default=None, min_length=5, max_length=100)
    course_code: Optional[str] = Field(default=None, min_length=6, max_length=10)
    level: Optional[Level] = None
    day: Optional[Weekday] = None
    time: Optional[str] = Field(default=None, min_length=1)


class CourseLecturer(CamelModel):
    """Owning lecturer as resolved into course listings."""

    id: str
    first_name: str


class CourseInfo(CamelModel):
    id: str
    course_name: str
    course_code: str
    level: Level
    day: Weekday
    time: str
    lecturer: Optional[CourseLecturer] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, model: CourseModel) -> "CourseInfo":
        lecturer = None
        if model.lecturer is not None:
            lecturer = CourseLecturer(
                id=model.lecturer.lecturer_id,
                first_name=model.lecturer.first_name,
            )
        return cls(
            id=model.course_id,
            course_name=model.course_name,
            course_code=model.course_code,
            level=model.level,
            day=model.day,
            time=model.time,
            lecturer=lecturer,
            created_at=model.create_at,
            updated_at=model.update_at,
        )


class CourseResponse(CamelModel):
    success: bool = True
    course: CourseInfo


class CourseListResponse(CamelModel):
    success: bool = True
    courses: List[CourseInfo]


class UpdatedCourseResponse(CamelModel):
    success: bool = True
    updated_course: CourseInfo
