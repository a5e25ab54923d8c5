"""Lecturer schema definitions.

Request and response contracts for the lecturer authentication and profile
routes. Passwords only ever appear on request models.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from models.lecturer import LecturerModel
from schemas.common import CamelModel


class LecturerSignUpRequest(CamelModel):
    first_name: str = Field(min_length=3, max_length=50)
    last_name: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=1024)


class LoginRequest(CamelModel):
    # Optional so that a missing field is reported by the login flow itself
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(CamelModel):
    email: str = Field(min_length=1)


class ResetPasswordRequest(CamelModel):
    password: str = Field(min_length=8, max_length=1024)
    confirm_password: str
    otp: str = Field(min_length=1)


class UpdateLecturerRequest(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=3, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None


class UpdatePasswordRequest(CamelModel):
    old_password: Optional[str] = None
    new_password: Optional[str] = Field(default=None, min_length=8, max_length=1024)


class LecturerInfo(CamelModel):
    """Public view of a lecturer record."""

    id: str
    first_name: str
    last_name: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, model: LecturerModel) -> "LecturerInfo":
        return cls(
            id=model.lecturer_id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            created_at=model.create_at,
            updated_at=model.update_at,
        )


class AuthResponse(CamelModel):
    """Body returned alongside the token cookie."""

    success: bool = True
    token: str
    user: LecturerInfo


class LecturerResponse(CamelModel):
    success: bool = True
    lecturer: LecturerInfo
