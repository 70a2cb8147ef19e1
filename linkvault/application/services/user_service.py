"""User application service: registration and credential login."""

from __future__ import annotations

import asyncio
import logging

from email_validator import EmailNotValidError, validate_email

from linkvault.application.dtos.user import UserCreate, UserResult
from linkvault.application.interfaces.repositories import IUserRepository
from linkvault.application.interfaces.services import IAuthSecurity
from linkvault.core.constants import (
    MAX_NAME_LENGTH,
    MIN_PASSWORD_LENGTH,
    MIN_USERNAME_LENGTH,
)
from linkvault.domain.exceptions import LinkVaultException

logger = logging.getLogger(__name__)

_LOGIN_FAILED = "Incorrect email or password"

# Lazy dummy hash for constant-time comparison when the account is not found.
# Computed once per process, in a thread, on the first unknown-account login.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash(auth_security: IAuthSecurity) -> str:
    """Return a valid password hash for dummy comparison; computed once per process."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            auth_security.hash_password, "not-a-real-password"
        )
    return _dummy_hash_cache


class UserService:
    """Register users and exchange credentials for a bearer token."""

    def __init__(self, user_repo: IUserRepository, auth_security: IAuthSecurity) -> None:
        self._user_repo = user_repo
        self._auth_security = auth_security

    async def register(self, data: UserCreate) -> UserResult:
        """Create a user. VALIDATION on bad input, CONFLICT when username or email is taken."""
        username = data.username.strip()
        if not MIN_USERNAME_LENGTH <= len(username) <= MAX_NAME_LENGTH:
            raise LinkVaultException.validation(
                f"Username must be between {MIN_USERNAME_LENGTH} and "
                f"{MAX_NAME_LENGTH} characters",
                field="username",
            )
        try:
            email = validate_email(data.email, check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise LinkVaultException.validation(str(e), field="email") from e
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise LinkVaultException.validation(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )

        hashed = await asyncio.to_thread(self._auth_security.hash_password, data.password)
        user = await self._user_repo.create_user(username, email, hashed)
        await self._user_repo.commit()
        logger.info("User %s registered", user.id)
        return user

    async def authenticate(
        self,
        password: str,
        *,
        email: str | None = None,
        username: str | None = None,
    ) -> tuple[str, UserResult]:
        """Return (access_token, user). AUTHENTICATION with one generic message on any mismatch."""
        if not email and not username:
            raise LinkVaultException.authentication(_LOGIN_FAILED)
        found = await self._user_repo.get_with_password(email=email, username=username)
        if found is None:
            # Constant-time path for unknown accounts.
            dummy_hash = await _get_dummy_hash(self._auth_security)
            await asyncio.to_thread(self._auth_security.verify_password, password, dummy_hash)
            raise LinkVaultException.authentication(_LOGIN_FAILED)
        user, hashed_password = found
        valid = await asyncio.to_thread(
            self._auth_security.verify_password, password, hashed_password
        )
        if not valid:
            raise LinkVaultException.authentication(_LOGIN_FAILED)

        token = self._auth_security.create_access_token(
            {"sub": str(user.id), "username": user.username}
        )
        logger.info("User %s logged in", user.id)
        return token, user
