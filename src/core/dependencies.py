"""Dependency injection module for FastAPI.

Settings and the mailer are created once at startup and stored on
``app.state``; managers get a request-scoped DB session.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from config import Settings
from core.database import get_db
from utils import auth_flow
from utils import course_manager
from utils import lecturer_manager
from utils import mailer
from utils import student_manager
from utils import token_issuer


def get_settings(request: Request) -> Settings:
    """Get the settings injected into the application at startup."""
    return request.app.state.settings


def get_mailer(request: Request) -> mailer.Mailer:
    return request.app.state.mailer


def get_token_issuer(
    settings: Settings = Depends(get_settings),
) -> token_issuer.TokenIssuer:
    return token_issuer.TokenIssuer(settings.auth)


def get_lecturer_manager(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> lecturer_manager.LecturerManager:
    """Get LecturerManager instance with request-scoped DB session.

    Args:
        db: Database session.
        settings: Application settings (for the bcrypt work factor).

    Returns:
        LecturerManager instance.
    """
    return lecturer_manager.LecturerManager(db, bcrypt_rounds=settings.auth.bcrypt_rounds)


def get_student_manager(db: Session = Depends(get_db)) -> student_manager.StudentManager:
    """Get StudentManager instance with request-scoped DB session."""
    return student_manager.StudentManager(db)


def get_course_manager(db: Session = Depends(get_db)) -> course_manager.CourseManager:
    """Get CourseManager instance with request-scoped DB session."""
    return course_manager.CourseManager(db)


def get_auth_flow(
    lecturers: lecturer_manager.LecturerManager = Depends(get_lecturer_manager),
    students: student_manager.StudentManager = Depends(get_student_manager),
    tokens: token_issuer.TokenIssuer = Depends(get_token_issuer),
    mail: mailer.Mailer = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
) -> auth_flow.AuthFlow:
    return auth_flow.AuthFlow(lecturers, students, tokens, mail, settings.auth)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
TokenIssuerDep = Annotated[token_issuer.TokenIssuer, Depends(get_token_issuer)]
LecturerManagerDep = Annotated[
    lecturer_manager.LecturerManager, Depends(get_lecturer_manager)
]
StudentManagerDep = Annotated[
    student_manager.StudentManager, Depends(get_student_manager)
]
CourseManagerDep = Annotated[course_manager.CourseManager, Depends(get_course_manager)]
AuthFlowDep = Annotated[auth_flow.AuthFlow, Depends(get_auth_flow)]
