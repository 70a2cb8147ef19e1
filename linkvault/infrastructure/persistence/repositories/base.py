"""Base repository: owner-scoped lookups, flush/commit, store error translation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from linkvault.domain.exceptions import LinkVaultException
from linkvault.infrastructure.persistence.database import Base


class BaseRepository[ModelType: Base]:
    """Base repository over one owner-scoped model.

    Driver errors never leave a repository: IntegrityError becomes CONFLICT,
    any other SQLAlchemyError becomes STORE (see store_errors).
    """

    conflict_message = "Record already exists"

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    @asynccontextmanager
    async def store_errors(self, operation: str) -> AsyncIterator[None]:
        """Translate SQLAlchemy failures raised inside the block."""
        try:
            yield
        except IntegrityError as e:
            await self.db.rollback()
            raise LinkVaultException.conflict(self.conflict_message) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise LinkVaultException.store(operation) from e

    async def _get_owned_row(self, owner_id: int, entity_id: int) -> ModelType | None:
        """Return the row if it exists and belongs to owner_id."""
        model: Any = self.model
        async with self.store_errors(f"{self.model.__tablename__} lookup"):
            result = await self.db.execute(
                select(self.model).where(model.id == entity_id, model.user_id == owner_id)
            )
            return result.scalar_one_or_none()

    async def _add(self, obj: ModelType) -> ModelType:
        """Insert obj and load server-assigned columns."""
        async with self.store_errors(f"{self.model.__tablename__} insert"):
            self.db.add(obj)
            await self.db.flush()
            await self.db.refresh(obj)
        return obj

    async def _flush(self, obj: ModelType) -> ModelType:
        async with self.store_errors(f"{self.model.__tablename__} update"):
            await self.db.flush()
            await self.db.refresh(obj)
        return obj

    async def _remove(self, obj: ModelType) -> None:
        async with self.store_errors(f"{self.model.__tablename__} delete"):
            await self.db.delete(obj)
            await self.db.flush()

    async def commit(self) -> None:
        """Commit the unit of work opened by the write session dependency."""
        async with self.store_errors("commit"):
            await self.db.commit()
