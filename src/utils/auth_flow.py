"""Authentication flow.

This module coordinates student registration, lecturer sign-up and login,
and the two-step password reset (request a code by email, then redeem it).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from config import AuthSettings
from core.exceptions import (
    BadRequestError,
    InvalidOtpError,
    MailDeliveryError,
    NotFoundError,
    UnauthorizedError,
)
from models.lecturer import LecturerModel
from models.student import StudentModel
from utils.lecturer_manager import LecturerManager
from utils.mailer import Mailer
from utils.otp import generate_otp
from utils.student_manager import StudentManager
from utils.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@dataclass
class AuthResult:
    """A freshly issued token and the lecturer it was issued for."""

    token: str
    lecturer: LecturerModel


class AuthFlow:
    """Orchestrates the credential store, token issuer, OTP generator and mailer."""

    def __init__(
        self,
        lecturers: LecturerManager,
        students: StudentManager,
        tokens: TokenIssuer,
        mailer: Mailer,
        settings: AuthSettings,
    ):
        self.lecturers = lecturers
        self.students = students
        self.tokens = tokens
        self.mailer = mailer
        self.settings = settings

    def register_student(
        self,
        first_name: str,
        last_name: str,
        email: str,
        matric_number: str,
        level: str,
        gender: str,
        images: Optional[List[str]] = None,
    ) -> StudentModel:
        """Register a student and notify them.

        Raises:
            ConflictError: If the email or matric number is taken.
        """
        student = self.students.create_student(
            first_name=first_name,
            last_name=last_name,
            email=email,
            matric_number=matric_number,
            level=level,
            gender=gender,
            images=images,
        )
        self._notify(
            email,
            "Registration successful",
            f"Hello {first_name}, your student record ({matric_number}) has been registered.",
        )
        return student

    def lecturer_sign_up(
        self, first_name: str, last_name: str, email: str, password: str
    ) -> AuthResult:
        """Create a lecturer account and log it in.

        Raises:
            ConflictError: If the email is taken.
        """
        lecturer = self.lecturers.create_lecturer(first_name, last_name, email, password)
        self._notify(
            email,
            "Welcome to the Attendance System",
            f"Hello {first_name}, your lecturer account has been created.",
        )
        return AuthResult(token=self.tokens.issue(lecturer.lecturer_id), lecturer=lecturer)

    def lecturer_log_in(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        """Check lecturer credentials and issue a token.

        Unknown email and wrong password produce the same error so that the
        response does not reveal which accounts exist.

        Args:
            email: Lecturer email.
            password: Plain text password.

        Returns:
            AuthResult with a new token.

        Raises:
            BadRequestError: If either field is missing.
            UnauthorizedError: If the credentials do not match.
        """
        if not email or not password:
            raise BadRequestError("Please enter your email and password")

        lecturer = self.lecturers.get_by_email(email)
        if lecturer is None or not self.lecturers.verify_password(
            password, lecturer.password_hash
        ):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("Lecturer logged in: %s", lecturer.lecturer_id)
        self._notify(
            email,
            "New login to your account",
            f"Hello {lecturer.first_name}, a new login to your account was just made.",
        )
        return AuthResult(token=self.tokens.issue(lecturer.lecturer_id), lecturer=lecturer)

    def forgot_password(self, email: str) -> None:
        """Email a password reset code to a lecturer.

        Raises:
            NotFoundError: If no lecturer has this email.
            MailDeliveryError: If the code could not be sent. The stored code
                is cleared first.
        """
        lecturer = self.lecturers.get_by_email(email)
        if lecturer is None:
            raise NotFoundError("Lecturer not found")

        otp, expires_at = generate_otp(self.settings.otp_length, self.settings.otp_expires)
        self.lecturers.set_otp(lecturer.lecturer_id, otp, expires_at)
        minutes = int(self.settings.otp_expires.total_seconds() // 60)

        try:
            self.mailer.send(
                lecturer.email,
                "Password reset code",
                f"Your password reset code is {otp}. It expires in {minutes} minutes.",
            )
        except MailDeliveryError:
            self.lecturers.clear_otp(lecturer.lecturer_id)
            raise

        logger.info("Password reset code issued for lecturer: %s", lecturer.lecturer_id)

    def reset_password(self, password: str, confirm_password: str, otp: str) -> AuthResult:
        """Redeem a reset code, set the new password and log the lecturer in.

        Raises:
            BadRequestError: If the passwords differ.
            InvalidOtpError: If no unexpired code matches.
        """
        if password != confirm_password:
            raise BadRequestError("Passwords do not match")

        lecturer = self.lecturers.consume_otp(otp, password)
        if lecturer is None:
            raise InvalidOtpError()
        return AuthResult(token=self.tokens.issue(lecturer.lecturer_id), lecturer=lecturer)

    def _notify(self, to: str, subject: str, body: str) -> None:
        # Best effort: a failed notification never fails the request
        try:
            self.mailer.send(to, subject, body)
        except MailDeliveryError as exc:
            logger.warning("Notification '%s' to %s not delivered: %s", subject, to, exc)
