"""Link ORM model."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkvault.infrastructure.persistence.database import Base
from linkvault.infrastructure.persistence.models.mixins import OwnedMixin, SerialIdMixin


class Link(SerialIdMixin, OwnedMixin, Base):
    """Table: links. category_id is cleared (SET NULL) when its category is deleted."""

    __tablename__ = "links"

    title: Mapped[str] = mapped_column(String(256), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
