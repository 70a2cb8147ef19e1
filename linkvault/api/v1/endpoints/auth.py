"""Auth API: registration and login (public endpoints)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from linkvault.api.v1.dependencies import get_user_service
from linkvault.application.dtos.user import UserCreate
from linkvault.application.services import UserService
from linkvault.core.limiter import limit_auth
from linkvault.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
@limit_auth
async def register(
    request: Request,
    body: RegisterRequest,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Create an account. 409 when the username or email is already registered."""
    user = await service.register(
        UserCreate(username=body.username, email=str(body.email), password=body.password)
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Exchange email (or username) and password for a bearer token."""
    token, user = await service.authenticate(
        body.password, email=body.email, username=body.username
    )
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))
