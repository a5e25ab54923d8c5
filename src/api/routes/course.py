"""Course management routes."""

from typing import Union

from fastapi import APIRouter, Depends, status

from api.routes.auth import get_current_lecturer
from core.dependencies import CourseManagerDep, LecturerManagerDep
from core.exceptions import NotFoundError
from models.lecturer import LecturerModel
from schemas.common import Level, MessageResponse
from schemas.course import (
    CourseInfo,
    CourseListResponse,
    CourseResponse,
    CreateCourseRequest,
    UpdateCourseRequest,
    UpdatedCourseResponse,
)

router = APIRouter(
    prefix="/courses",
    tags=["Courses"],
    dependencies=[Depends(get_current_lecturer)],
)

LEVELS = {level.value for level in Level}


def _build_list(models) -> CourseListResponse:
    return CourseListResponse(courses=[CourseInfo.from_model(m) for m in models])


@router.post(
    "/new",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a course",
)
def create_course(
    req: CreateCourseRequest,
    course_manager: CourseManagerDep,
    current_lecturer: LecturerModel = Depends(get_current_lecturer),
) -> CourseResponse:
    model = course_manager.create_course(
        lecturer_id=current_lecturer.lecturer_id,
        course_name=req.course_name,
        course_code=req.course_code,
        level=req.level.value,
        day=req.day.value,
        time=req.time,
    )
    return CourseResponse(course=CourseInfo.from_model(model))


@router.get("/all", response_model=CourseListResponse, summary="List all courses")
def list_courses(course_manager: CourseManagerDep) -> CourseListResponse:
    return _build_list(course_manager.list_courses())


@router.get(
    "/lecturer/{lecturer_id}",
    response_model=CourseListResponse,
    summary="List courses by lecturer",
)
def list_courses_by_lecturer(
    lecturer_id: str, course_manager: CourseManagerDep
) -> CourseListResponse:
    return _build_list(course_manager.list_by_lecturer(lecturer_id))


@router.get(
    "/level/{level}",
    response_model=CourseListResponse,
    summary="List courses by level",
)
def list_courses_by_level(level: Level, course_manager: CourseManagerDep) -> CourseListResponse:
    return _build_list(course_manager.list_by_level(level.value))


@router.get(
    "/{key}",
    response_model=Union[CourseResponse, CourseListResponse],
    summary="Get a course by id, or list courses by lecturer id or level",
)
def get_courses_by_key(
    key: str,
    course_manager: CourseManagerDep,
    lecturer_manager: LecturerManagerDep,
) -> Union[CourseResponse, CourseListResponse]:
    """Resolve the shared ``/courses/{key}`` path.

    A level such as ``300`` lists that level's courses, a course id returns
    that course, and a lecturer id lists the lecturer's courses.

    Args:
        key: Level, course id or lecturer id.
        course_manager: Injected CourseManager instance.
        lecturer_manager: Injected LecturerManager instance.

    Returns:
        A single course or a list of courses.

    Raises:
        NotFoundError: If nothing matches, or a level or lecturer has no courses.
    """
    if key in LEVELS:
        return _build_list(course_manager.list_by_level(key))

    course = course_manager.find_course(key)
    if course is not None:
        return CourseResponse(course=CourseInfo.from_model(course))

    if lecturer_manager.get_by_id(key) is not None:
        return _build_list(course_manager.list_by_lecturer(key))

    raise NotFoundError("Course not found")


@router.put("/{course_id}", response_model=UpdatedCourseResponse, summary="Update a course")
def update_course(
    course_id: str,
    req: UpdateCourseRequest,
    course_manager: CourseManagerDep,
    current_lecturer: LecturerModel = Depends(get_current_lecturer),
) -> UpdatedCourseResponse:
    """Update a course owned by the current lecturer.

    A course owned by someone else is reported as not found.
    """
    model = course_manager.update_course(
        course_id,
        current_lecturer.lecturer_id,
        req.model_dump(exclude_unset=True, mode="json"),
    )
    return UpdatedCourseResponse(updated_course=CourseInfo.from_model(model))


@router.delete("/{course_id}", response_model=MessageResponse, summary="Delete a course")
def delete_course(
    course_id: str,
    course_manager: CourseManagerDep,
    current_lecturer: LecturerModel = Depends(get_current_lecturer),
) -> MessageResponse:
    course_manager.delete_course(course_id, current_lecturer.lecturer_id)
    return MessageResponse(message="Course deleted successfully")
