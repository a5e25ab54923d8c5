"""Lecturer management utilities.

This module provides lecturer storage, password hashing and the password
reset code bookkeeping used by the authentication flow.
"""

import logging
from datetime import datetime
from typing import Optional

import bcrypt
import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import BCRYPT_ROUNDS
from core.exceptions import ConflictError, NotFoundError
from models.lecturer import LecturerModel

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def normalize_email(email: str) -> str:
    """Canonical form used for storing and matching lecturer emails."""
    return email.strip().lower()


class LecturerManager:
    """Manages lecturer persistence and credentials using SQLAlchemy."""

    def __init__(self, db: Session, bcrypt_rounds: int = BCRYPT_ROUNDS):
        """Initialize LecturerManager.

        Args:
            db: SQLAlchemy Session.
            bcrypt_rounds: Work factor for new password hashes.
        """
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > BCRYPT_MAX_BYTES:
            logger.warning(
                "Password exceeds %d bytes (%d bytes), truncating",
                BCRYPT_MAX_BYTES,
                len(password_bytes),
            )
            password_bytes = password_bytes[:BCRYPT_MAX_BYTES]

        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        hashed = bcrypt.hashpw(password_bytes, salt)
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def create_lecturer(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> LecturerModel:
        """Create a new lecturer.

        Args:
            first_name: Lecturer's first name.
            last_name: Lecturer's last name.
            email: Unique email address.
            password: Plain text password, stored hashed.

        Returns:
            Created LecturerModel.

        Raises:
            ConflictError: If the email is already registered.
        """
        email = normalize_email(email)
        if self.get_by_email(email) is not None:
            raise ConflictError("Lecturer already exist")

        model = LecturerModel(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=self.hash_password(password),
        )
        # The unique constraint still catches two sign-ups racing past the check above
        try:
            self.db.add(model)
            self.db.commit()
            self.db.refresh(model)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Lecturer already exist") from e

        logger.info("Created lecturer: %s", model.lecturer_id)
        return model

    def get_by_email(self, email: str) -> Optional[LecturerModel]:
        return (
            self.db.query(LecturerModel)
            .filter(LecturerModel.email == normalize_email(email))
            .first()
        )

    def get_by_id(self, lecturer_id: str) -> Optional[LecturerModel]:
        return (
            self.db.query(LecturerModel)
            .filter(LecturerModel.lecturer_id == lecturer_id)
            .first()
        )

    def get_lecturer(self, lecturer_id: str) -> LecturerModel:
        """Get a lecturer by id or raise NotFoundError."""
        model = self.get_by_id(lecturer_id)
        if model is None:
            raise NotFoundError("Lecturer not found")
        return model

    def update_profile(
        self,
        lecturer_id: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> LecturerModel:
        """Update name and email fields of a lecturer.

        Args:
            lecturer_id: Lecturer to update.
            first_name: New first name, or None to keep.
            last_name: New last name, or None to keep.
            email: New email, or None to keep.

        Returns:
            Updated LecturerModel.

        Raises:
            NotFoundError: If the lecturer does not exist.
            ConflictError: If the email belongs to another lecturer.
        """
        model = self.get_lecturer(lecturer_id)
        email = normalize_email(email) if email is not None else None
        if email is not None and email != model.email:
            if self.get_by_email(email) is not None:
                raise ConflictError("Email is already in use")
            model.email = email
        if first_name is not None:
            model.first_name = first_name
        if last_name is not None:
            model.last_name = last_name

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("Email is already in use") from e
        self.db.refresh(model)
        logger.info("Updated lecturer profile: %s", lecturer_id)
        return model

    def set_password(self, lecturer_id: str, password: str) -> None:
        self._update(lecturer_id, password_hash=self.hash_password(password))
        logger.info("Updated password for lecturer: %s", lecturer_id)

    def delete_lecturer(self, lecturer_id: str) -> None:
        """Delete a lecturer together with the courses they own.

        Raises:
            NotFoundError: If the lecturer does not exist.
        """
        model = self.get_lecturer(lecturer_id)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted lecturer: %s", lecturer_id)

    def set_otp(self, lecturer_id: str, otp: str, expires_at: datetime) -> None:
        """Store a password reset code in a single write."""
        self._update(lecturer_id, otp=otp, otp_expires_at=expires_at)

    def clear_otp(self, lecturer_id: str) -> None:
        self._update(lecturer_id, otp=None, otp_expires_at=None)

    def consume_otp(self, otp: str, new_password: str) -> Optional[LecturerModel]:
        """Redeem a reset code and set a new password.

        The lecturer is looked up by code alone, and only while the code is
        unexpired. The new hash and the cleared code are written by one UPDATE
        that re-checks the code, so only one of several concurrent redemptions
        can win.

        Args:
            otp: Code sent to the lecturer.
            new_password: Plain text replacement password.

        Returns:
            The updated LecturerModel, or None if no valid code matched.
        """
        model = (
            self.db.query(LecturerModel)
            .filter(
                LecturerModel.otp == otp,
                LecturerModel.otp_expires_at > datetime.now(pytz.utc),
            )
            .first()
        )
        if model is None:
            return None

        password_hash = self.hash_password(new_password)
        redeemed = (
            self.db.query(LecturerModel)
            .filter(
                LecturerModel.lecturer_id == model.lecturer_id,
                LecturerModel.otp == otp,
                LecturerModel.otp_expires_at > datetime.now(pytz.utc),
            )
            .update(
                {"password_hash": password_hash, "otp": None, "otp_expires_at": None},
                synchronize_session=False,
            )
        )
        self.db.commit()
        if not redeemed:
            logger.warning("Reset code for lecturer %s was already used", model.lecturer_id)
            return None

        self.db.refresh(model)
        logger.info("Password reset completed for lecturer: %s", model.lecturer_id)
        return model

    def _update(self, lecturer_id: str, **values) -> None:
        updated = (
            self.db.query(LecturerModel)
            .filter(LecturerModel.lecturer_id == lecturer_id)
            .update(values, synchronize_session=False)
        )
        self.db.commit()
        if not updated:
            raise NotFoundError("Lecturer not found")
