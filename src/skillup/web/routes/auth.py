"""Auth endpoints: signup, login, current user."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from skillup.core.security import create_access_token
from skillup.db.users_repository import (
    DuplicateEmailError,
    UserRecord,
    authenticate,
    create_user,
)
from skillup.utils.validators import clean_text, validate_email
from skillup.web.deps import get_current_user
from skillup.web.schemas import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    UserResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: UserRecord) -> AuthResponse:
    return AuthResponse(
        success=True,
        user=UserResponse(**user.to_public_dict()),
        token=create_access_token(user.id),
    )


@router.post("/signup", response_model=AuthResponse)
async def signup(data: SignupRequest) -> AuthResponse:
    """Create an account and return it with a session token."""
    if not validate_email(data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email format",
        )

    try:
        user = create_user(
            name=data.name,
            email=data.email,
            password=data.password,
            department=clean_text(data.department),
        )
    except DuplicateEmailError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists",
        )

    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest) -> AuthResponse:
    """Check credentials and return the user with a session token."""
    user = authenticate(data.email, data.password)
    if user is None:
        logger.info("auth.login_failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    logger.info("auth.login", user_id=user.id)
    return _auth_response(user)


@router.get("/me", response_model=UserResponse)
async def me(user: UserRecord = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse(**user.to_public_dict())
