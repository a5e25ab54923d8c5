"""Configuration module for the Attendance API.

This module provides centralized configuration management, including directory
paths, API server settings, database, authentication and mail configuration.
All configuration values can be overridden via environment variables.
"""

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "3000"))

# CORS allowed origins (comma-separated list)
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Database Configuration ---

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/attendance.db")

# --- Authentication Configuration ---

JWT_SECRET: str = os.getenv("JWT_SECRET", "secret")
JWT_ALGORITHM: str = "HS256"
JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", "120"))  # 2 hours

# Lifetime of the `token` cookie, in days
COOKIE_EXPIRE_DAYS: int = int(os.getenv("COOKIE_EXPIRE", "1"))
COOKIE_SECURE: bool = os.getenv("COOKIE_SECURE", "false").lower() == "true"

# Bcrypt work factor for lecturer passwords (bcrypt accepts 4-31)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "8"))

# Password reset one-time codes
OTP_LENGTH: int = int(os.getenv("OTP_LENGTH", "6"))
OTP_EXPIRE_MINUTES: int = int(os.getenv("OTP_EXPIRE_MINUTES", "10"))

# --- Mail Configuration ---

# Leave SMTP_HOST empty to disable outgoing mail (messages are skipped with a warning)
SMTP_HOST: Optional[str] = os.getenv("SMTP_HOST")
SMTP_PORT: int = int(os.getenv("SMTP_PORT", "465"))
SMTP_USER: Optional[str] = os.getenv("SMTP_USER")
SMTP_PASSWORD: Optional[str] = os.getenv("SMTP_PASSWORD")
SMTP_SENDER: str = os.getenv("SMTP_SENDER", '"Attendance System" <no-reply@localhost>')
SMTP_USE_SSL: bool = os.getenv("SMTP_USE_SSL", "true").lower() == "true"


@dataclass(frozen=True)
class AuthSettings:
    """Settings shared by the token issuer and the authentication flow."""

    secret_key: str
    algorithm: str = JWT_ALGORITHM
    token_expires: timedelta = timedelta(minutes=JWT_EXPIRE_MINUTES)
    cookie_name: str = "token"
    cookie_expires: timedelta = timedelta(days=COOKIE_EXPIRE_DAYS)
    cookie_secure: bool = COOKIE_SECURE
    bcrypt_rounds: int = BCRYPT_ROUNDS
    otp_length: int = OTP_LENGTH
    otp_expires: timedelta = timedelta(minutes=OTP_EXPIRE_MINUTES)


@dataclass(frozen=True)
class MailSettings:
    """SMTP settings for the notification mailer."""

    host: Optional[str] = None
    port: int = 465
    user: Optional[str] = None
    password: Optional[str] = None
    sender: str = SMTP_SENDER
    use_ssl: bool = True


@dataclass(frozen=True)
class Settings:
    auth: AuthSettings
    mail: MailSettings


def load_settings() -> Settings:
    """Assemble the runtime settings from the environment-derived constants.

    Returns:
        Settings instance injected into the application at startup.
    """
    return Settings(
        auth=AuthSettings(secret_key=JWT_SECRET),
        mail=MailSettings(
            host=SMTP_HOST,
            port=SMTP_PORT,
            user=SMTP_USER,
            password=SMTP_PASSWORD,
            sender=SMTP_SENDER,
            use_ssl=SMTP_USE_SSL,
        ),
    )
