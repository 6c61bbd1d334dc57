"""Bookmark model."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookmark_api.database import Base
from bookmark_api.models.base import TimestampMixin

if TYPE_CHECKING:
    from bookmark_api.models.user import User


class Bookmark(TimestampMixin, Base):
    """A saved link. Visible and mutable only through its owner."""

    __tablename__ = "bookmarks"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # Free-form: not validated as a URL
    link: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship(back_populates="bookmarks")

    def __repr__(self) -> str:
        return f"<Bookmark id={self.id} user_id={self.user_id} title={self.title!r}>"
