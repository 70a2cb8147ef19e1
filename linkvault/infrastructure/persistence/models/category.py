"""Category ORM model (owner-scoped, unique name per owner)."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from linkvault.infrastructure.persistence.database import Base
from linkvault.infrastructure.persistence.models.mixins import OwnedMixin, SerialIdMixin


class Category(SerialIdMixin, OwnedMixin, Base):
    """Table: categories. Unique (user_id, name)."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(256), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_name"),
    )
