"""Auth dependencies (composition root): credential adapter and bearer-token identity."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from linkvault.core.config import get_settings
from linkvault.domain.exceptions import LinkVaultException
from linkvault.infrastructure.security.jwt import create_access_token, user_id_from_token
from linkvault.infrastructure.security.password import hash_password, verify_password

_http_bearer = HTTPBearer(auto_error=False)


class AuthSecurity:
    """Token and password hashing provided via DI (no direct infra imports in services)."""

    def __init__(self, bcrypt_rounds: int) -> None:
        self.bcrypt_rounds = bcrypt_rounds

    def create_access_token(self, data: dict[str, Any]) -> str:
        return create_access_token(data)

    def hash_password(self, password: str) -> str:
        return hash_password(password, rounds=self.bcrypt_rounds)

    def verify_password(self, password: str, hashed_password: str) -> bool:
        return verify_password(password, hashed_password)


def get_auth_security() -> AuthSecurity:
    """Auth token creation and password hashing (composition root)."""
    return AuthSecurity(bcrypt_rounds=get_settings().bcrypt_rounds)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> int:
    """Owner id from a verified bearer token; AUTHENTICATION (401) otherwise.

    The id is taken from the token only, never from the request body or query.
    """
    if credentials is None:
        raise LinkVaultException.authentication("Not authenticated")
    try:
        return user_id_from_token(credentials.credentials)
    except ValueError as e:
        raise LinkVaultException.authentication("Invalid or expired token") from e
