"""Authentication routes.

This module handles HTTP endpoints for student registration, lecturer
sign-up/login/logout and password reset, and provides the
``get_current_lecturer`` dependency guarding every protected route.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import AuthSettings
from core.dependencies import (
    AuthFlowDep,
    LecturerManagerDep,
    SettingsDep,
    TokenIssuerDep,
)
from core.exceptions import InvalidTokenError, UnauthorizedError
from models.lecturer import LecturerModel
from schemas.common import MessageResponse
from schemas.lecturer import (
    AuthResponse,
    ForgotPasswordRequest,
    LecturerInfo,
    LoginRequest,
    LecturerSignUpRequest,
    ResetPasswordRequest,
)
from schemas.student import RegisterStudentRequest
from utils.auth_flow import AuthResult

router = APIRouter(tags=["Auth"])

# Header fallback for clients that cannot keep cookies
security = HTTPBearer(auto_error=False)


def get_current_lecturer(
    request: Request,
    tokens: TokenIssuerDep,
    lecturer_manager: LecturerManagerDep,
    settings: SettingsDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> LecturerModel:
    """Resolve the lecturer behind the request's token.

    The ``token`` cookie is tried first, then an ``Authorization: Bearer``
    header, so a stale cookie does not mask a valid header token.

    Args:
        request: Incoming request.
        tokens: Injected TokenIssuer.
        lecturer_manager: Injected LecturerManager instance.
        settings: Application settings.
        credentials: Optional bearer credentials from the header.

    Returns:
        The authenticated LecturerModel.

    Raises:
        UnauthorizedError: If no token is sent or the lecturer no longer exists.
        InvalidTokenError: If no sent token verifies.
    """
    candidates = [request.cookies.get(settings.auth.cookie_name)]
    if credentials is not None:
        candidates.append(credentials.credentials)
    candidates = [token for token in candidates if token]
    if not candidates:
        raise UnauthorizedError()

    lecturer_id = _verify_first(tokens, candidates)
    lecturer = lecturer_manager.get_by_id(lecturer_id)
    if lecturer is None:
        # Tokens outlive account deletion
        raise UnauthorizedError("Lecturer no longer exists, please sign up again")
    return lecturer


def _verify_first(tokens, candidates) -> str:
    """Return the principal of the first token that verifies."""
    error = None
    for token in candidates:
        try:
            return tokens.verify(token)
        except InvalidTokenError as e:
            error = e
    raise error


def _send_token(response: Response, result: AuthResult, settings: AuthSettings) -> AuthResponse:
    response.set_cookie(
        key=settings.cookie_name,
        value=result.token,
        max_age=int(settings.cookie_expires.total_seconds()),
        expires=int(settings.cookie_expires.total_seconds()),
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return AuthResponse(token=result.token, user=LecturerInfo.from_model(result.lecturer))


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a student",
)
def register_student(req: RegisterStudentRequest, auth_flow: AuthFlowDep) -> MessageResponse:
    """Store a new student record.

    Args:
        req: Student details.
        auth_flow: Injected AuthFlow.

    Returns:
        Success message.
    """
    auth_flow.register_student(
        first_name=req.first_name,
        last_name=req.last_name,
        email=req.email,
        matric_number=req.matric_number,
        level=req.level.value,
        gender=req.gender,
        images=req.images,
    )
    return MessageResponse(message="Student data stored successfully")


@router.post(
    "/lecturer/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Lecturer sign up",
)
def lecturer_sign_up(
    req: LecturerSignUpRequest,
    response: Response,
    auth_flow: AuthFlowDep,
    settings: SettingsDep,
) -> AuthResponse:
    result = auth_flow.lecturer_sign_up(
        req.first_name, req.last_name, req.email, req.password
    )
    return _send_token(response, result, settings.auth)


@router.post("/lecturer/login", response_model=AuthResponse, summary="Lecturer login")
def lecturer_log_in(
    req: LoginRequest,
    response: Response,
    auth_flow: AuthFlowDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Login with email and password.

    Args:
        req: Login request with email and password.
        response: Outgoing response, receives the token cookie.
        auth_flow: Injected AuthFlow.
        settings: Application settings.

    Returns:
        AuthResponse with lecturer information and token.
    """
    result = auth_flow.lecturer_log_in(req.email, req.password)
    return _send_token(response, result, settings.auth)


@router.post("/lecturer/logout", response_model=MessageResponse, summary="Lecturer logout")
def lecturer_log_out(response: Response, settings: SettingsDep) -> MessageResponse:
    """Drop the token cookie.

    Tokens are stateless, so one copied elsewhere stays valid until it expires.
    """
    response.delete_cookie(settings.auth.cookie_name)
    return MessageResponse(message="Logged out successfully")


@router.post(
    "/lecturer/forgotpassword",
    response_model=MessageResponse,
    summary="Request a password reset code",
)
def forgot_password(req: ForgotPasswordRequest, auth_flow: AuthFlowDep) -> MessageResponse:
    auth_flow.forgot_password(req.email)
    return MessageResponse(message=f"Password reset code sent to {req.email}")


@router.put("/lecturer/reset", response_model=AuthResponse, summary="Reset password")
def reset_password(
    req: ResetPasswordRequest,
    response: Response,
    auth_flow: AuthFlowDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Set a new password using the emailed code, then log the lecturer in.

    Args:
        req: New password, its confirmation and the reset code.
        response: Outgoing response, receives the token cookie.
        auth_flow: Injected AuthFlow.
        settings: Application settings.

    Returns:
        AuthResponse with a fresh token.
    """
    result = auth_flow.reset_password(req.password, req.confirm_password, req.otp)
    return _send_token(response, result, settings.auth)
