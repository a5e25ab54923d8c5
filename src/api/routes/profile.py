"""Lecturer and student profile routes."""

from fastapi import APIRouter, Depends, Response

from api.routes.auth import get_current_lecturer
from core.dependencies import LecturerManagerDep, SettingsDep, StudentManagerDep
from core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from models.lecturer import LecturerModel
from schemas.common import MessageResponse
from schemas.lecturer import (
    LecturerInfo,
    LecturerResponse,
    UpdateLecturerRequest,
    UpdatePasswordRequest,
)
from schemas.student import StudentInfo, StudentListResponse, StudentResponse

router = APIRouter(tags=["Profiles"], dependencies=[Depends(get_current_lecturer)])


@router.get(
    "/lecturer/id/{lecturer_id}",
    response_model=LecturerResponse,
    summary="Get lecturer by id",
)
def get_lecturer_by_id(lecturer_id: str, lecturer_manager: LecturerManagerDep) -> LecturerResponse:
    model = lecturer_manager.get_lecturer(lecturer_id)
    return LecturerResponse(lecturer=LecturerInfo.from_model(model))


@router.get(
    "/lecturer/email/{email}",
    response_model=LecturerResponse,
    summary="Get lecturer by email",
)
def get_lecturer_by_email(email: str, lecturer_manager: LecturerManagerDep) -> LecturerResponse:
    model = lecturer_manager.get_by_email(email)
    if model is None:
        raise NotFoundError("Lecturer not found")
    return LecturerResponse(lecturer=LecturerInfo.from_model(model))


@router.put(
    "/lecturer/id/{lecturer_id}",
    response_model=LecturerResponse,
    summary="Update lecturer details",
)
def update_lecturer_profile(
    lecturer_id: str,
    req: UpdateLecturerRequest,
    lecturer_manager: LecturerManagerDep,
    current_lecturer: LecturerModel = Depends(get_current_lecturer),
) -> LecturerResponse:
    """Update the current lecturer's name or email.

    Args:
        lecturer_id: Lecturer to update; must be the current lecturer.
        req: Fields to change.
        lecturer_manager: Injected LecturerManager instance.
        current_lecturer: Authenticated lecturer.

    Returns:
        LecturerResponse with the updated record.

    Raises:
        UnauthorizedError: If updating someone else's profile.
        NotFoundError: If the lecturer does not exist.
        ConflictError: If the new email is taken.
    """
    if lecturer_id != current_lecturer.lecturer_id:
        # Unknown ids are reported as missing rather than forbidden
        lecturer_manager.get_lecturer(lecturer_id)
        raise UnauthorizedError("Not Authorized to update this user")

    model = lecturer_manager.update_profile(
        lecturer_id,
        first_name=req.first_name,
        last_name=req.last_name,
        email=req.email,
    )
    return LecturerResponse(lecturer=LecturerInfo.from_model(model))


@router.put(
    "/lecturer/password/update",
    response_model=MessageResponse,
    summary="Update lecturer password",
)
def update_lecturer_password(
    req: UpdatePasswordRequest,
    lecturer_manager: LecturerManagerDep,
    current_lecturer: LecturerModel = Depends(get_current_lecturer),
) -> MessageResponse:
    if not req.old_password or not req.new_password:
        raise BadRequestError("Enter a new password")

    model = lecturer_manager.get_lecturer(current_lecturer.lecturer_id)
    if not lecturer_manager.verify_password(req.old_password, model.password_hash):
        raise UnauthorizedError("Incorrect old password")

    lecturer_manager.set_password(model.lecturer_id, req.new_password)
    return MessageResponse(message="Password updated successfully")


@router.delete(
    "/lecturer/id/{lecturer_id}",
    response_model=MessageResponse,
    summary="Delete lecturer account",
)
def delete_lecturer_account(
    lecturer_id: str,
    response: Response,
    lecturer_manager: LecturerManagerDep,
    settings: SettingsDep,
    current_lecturer: LecturerModel = Depends(get_current_lecturer),
) -> MessageResponse:
    """Delete the current lecturer's account and the courses it owns."""
    lecturer_manager.get_lecturer(lecturer_id)
    if lecturer_id != current_lecturer.lecturer_id:
        raise UnauthorizedError("Not Authorized to delete this user")

    lecturer_manager.delete_lecturer(lecturer_id)
    response.delete_cookie(settings.auth.cookie_name)
    return MessageResponse(message="Lecturer account deleted successfully")


@router.get("/student", response_model=StudentListResponse, summary="List all students")
def list_students(student_manager: StudentManagerDep) -> StudentListResponse:
    models = student_manager.list_students()
    return StudentListResponse(students=[StudentInfo.from_model(m) for m in models])


@router.get(
    "/student/{matric_number}",
    response_model=StudentResponse,
    summary="Get student by matric number",
)
def get_student_by_matric_number(
    matric_number: str, student_manager: StudentManagerDep
) -> StudentResponse:
    model = student_manager.get_student(matric_number)
    return StudentResponse(student=StudentInfo.from_model(model))
