from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from application.use_cases.auth import RegisterUseCase
from domain.errors import RegistrationError
from domain.ports import UserRepository
from infrastructure.api.dependencies import get_settings, get_user_repository
from infrastructure.api.errors import registration_error_response
from infrastructure.config import Settings

router = APIRouter()


# ── Request / Response schemas ────────────────────────────────

class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    created_at: Optional[datetime] = None


class ErrorResponse(BaseModel):
    error: str


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def register(
    body: RegisterRequest,
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
):
    """Register a new user account"""
    use_case = RegisterUseCase(
        repo,
        hash_rounds=settings.bcrypt_rounds,
        store_timeout=settings.store_timeout_seconds,
    )
    try:
        user = await use_case.execute(body.username, body.email, body.password)
    except RegistrationError as e:
        return registration_error_response(e)
    return UserResponse(
        id=str(user.id),
        username=user.username,
        email=user.email,
        created_at=user.created_at,
    )
