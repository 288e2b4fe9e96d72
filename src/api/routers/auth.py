"""Session authentication endpoints: register, login, profile, logout."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_settings
from core.auth import login_session, logout_session
from core.config import Settings
from models.user import User
from schemas.user import LoginRequest, UserCreate, UserResponse
from services import user_service
from services.exceptions import InvalidCredentialsError, UsernameTakenError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse)
async def register(
    request: Request,
    data: UserCreate,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> UserResponse:
    """Create an account and log it in."""
    try:
        user = await user_service.create_user(db, data, bcrypt_rounds=settings.bcrypt_rounds)
    except UsernameTakenError as e:
        raise HTTPException(
            status_code=403,
            detail={"message": str(e), "error_code": "USERNAME_TAKEN"},
        )
    login_session(request, user)
    logger.info("Registered user %s", user.id)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=UserResponse)
async def login(
    request: Request,
    data: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Check credentials and bind the session to the user."""
    try:
        user = await user_service.authenticate(db, data.username, data.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=403, detail=str(e))
    login_session(request, user)
    return UserResponse.model_validate(user)


@router.post("/profile", response_model=UserResponse)
async def profile(current_user: User = Depends(get_current_user)) -> User:
    """Get the logged-in user."""
    return current_user


@router.post("/logout", status_code=200)
async def logout(request: Request) -> dict[str, str]:
    """Destroy the session. Succeeds whether or not anyone was logged in."""
    logout_session(request)
    return {"status": "logged out"}
