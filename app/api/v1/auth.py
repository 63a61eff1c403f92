"""Login, registration, logout and current-identity endpoints."""

from fastapi import APIRouter, HTTPException, Response, status

from app.api.deps import CurrentUser, DbSession
from app.core.errors import (
    AccountInactiveError,
    AuthenticationError,
    DuplicateEmailError,
    NotFoundError,
    ValidationError,
)
from app.core.security import clear_session_cookie, set_session_cookie
from app.schemas.auth import (
    AuthenticatedIdentity,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegisterRequest,
    RegisterResponse,
    UserSummary,
)
from app.services import auth as auth_service

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, response: Response, db: DbSession) -> LoginResponse:
    """
    Authenticate with email and password.

    On success the session token is set as an HttpOnly cookie and also
    returned in the body for non-browser clients (Authorization: Bearer).
    """
    try:
        result = auth_service.login(db, body.email, body.password)
    except AccountInactiveError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    set_session_cookie(response, result.token)
    return LoginResponse(user=UserSummary.from_entity(result.user), token=result.token)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: DbSession) -> RegisterResponse:
    """Create an account with the default user role. Does not log in."""
    try:
        user = auth_service.register(
            db,
            email=body.email,
            password=body.password,
            full_name=body.full_name,
            phone=body.phone,
            occupation_id=body.occupation_id,
        )
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return RegisterResponse(user=UserSummary.from_entity(user))


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. Idempotent; works without a session."""
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AuthenticatedIdentity)
def me(current_user: CurrentUser) -> AuthenticatedIdentity:
    return AuthenticatedIdentity.from_entity(current_user)


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    current_user: CurrentUser,
    db: DbSession,
) -> MessageResponse:
    try:
        auth_service.change_password(db, current_user.id, body.old_password, body.new_password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return MessageResponse(message="Password changed successfully")


@router.post("/password-reset/request", response_model=MessageResponse)
def request_password_reset(body: PasswordResetRequest, db: DbSession) -> MessageResponse:
    """Always answers the same way, whether or not the email exists."""
    auth_service.request_password_reset(db, body.email)
    return MessageResponse(
        message="If an account with that email exists, a password reset link has been sent."
    )


@router.post("/password-reset/confirm", response_model=MessageResponse)
def confirm_password_reset(body: PasswordResetConfirm, db: DbSession) -> MessageResponse:
    try:
        auth_service.reset_password(db, body.token, body.new_password)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return MessageResponse(
        message="Password reset successful. Please login with your new password."
    )
