"""Repository dependencies (composition root).

Read repositories share the request's read session; write repositories share
the request's write session, so a service's lookups and writes run in one
unit of work.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from linkvault.infrastructure.persistence.database import get_db, get_db_transactional
from linkvault.infrastructure.persistence.repositories import (
    CategoryRepository,
    LinkRepository,
    UserRepository,
)


async def get_user_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRepository:
    """User repository for writes (registration)."""
    return UserRepository(db)


async def get_category_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CategoryRepository:
    return CategoryRepository(db)


async def get_category_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> CategoryRepository:
    return CategoryRepository(db)


async def get_link_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LinkRepository:
    return LinkRepository(db)


async def get_link_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> LinkRepository:
    return LinkRepository(db)
