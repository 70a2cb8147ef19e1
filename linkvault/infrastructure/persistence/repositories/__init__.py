"""SQLAlchemy repositories implementing application.interfaces.repositories."""

from linkvault.infrastructure.persistence.repositories.category_repo import (
    CategoryRepository,
)
from linkvault.infrastructure.persistence.repositories.link_repo import LinkRepository
from linkvault.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = ["CategoryRepository", "LinkRepository", "UserRepository"]
