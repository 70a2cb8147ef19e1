"""Pydantic request/response schemas for the API."""

from linkvault.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from linkvault.schemas.category import (
    CategoryDeletedResponse,
    CategoryDetailResponse,
    CategoryRequest,
    CategoryResponse,
)
from linkvault.schemas.common import MessageResponse
from linkvault.schemas.health import HealthResponse, ReadinessResponse
from linkvault.schemas.link import (
    LinkCreateRequest,
    LinkItemResponse,
    LinkListResponse,
    LinkResponse,
    LinkUpdateRequest,
)

__all__ = [
    "CategoryDeletedResponse",
    "CategoryDetailResponse",
    "CategoryRequest",
    "CategoryResponse",
    "HealthResponse",
    "LinkCreateRequest",
    "LinkItemResponse",
    "LinkListResponse",
    "LinkResponse",
    "LinkUpdateRequest",
    "LoginRequest",
    "MessageResponse",
    "ReadinessResponse",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
]
