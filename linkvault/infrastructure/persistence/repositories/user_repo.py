"""User repository. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkvault.application.dtos.user import UserResult
from linkvault.infrastructure.persistence.models.user import User
from linkvault.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(id=u.id, username=u.username, email=u.email)


class UserRepository(BaseRepository[User]):
    """Lookup by id or credentials, and registration insert."""

    conflict_message = "Username or email already registered"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: int) -> UserResult | None:
        async with self.store_errors("user lookup"):
            user = await self.db.get(User, user_id)
        return _user_to_result(user) if user else None

    async def get_with_password(
        self, *, email: str | None = None, username: str | None = None
    ) -> tuple[UserResult, str] | None:
        if email:
            condition = User.email == email
        elif username:
            condition = User.username == username
        else:
            return None
        async with self.store_errors("user lookup"):
            result = await self.db.execute(select(User).where(condition))
            user = result.scalar_one_or_none()
        if user is None:
            return None
        return _user_to_result(user), user.hashed_password

    async def create_user(
        self, username: str, email: str, hashed_password: str
    ) -> UserResult:
        user = await self._add(
            User(username=username, email=email, hashed_password=hashed_password)
        )
        return _user_to_result(user)
