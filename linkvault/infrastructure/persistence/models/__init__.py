"""ORM models. Importing this package registers every table on Base.metadata."""

from linkvault.infrastructure.persistence.models.category import Category
from linkvault.infrastructure.persistence.models.link import Link
from linkvault.infrastructure.persistence.models.user import User

__all__ = ["Category", "Link", "User"]
