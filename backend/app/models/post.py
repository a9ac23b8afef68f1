"""
Blog Backend - Post SQLAlchemy Model
======================================

What:  ORM model for the `posts` table.
Who:   Read and written by BlogStore; tracked by Alembic.

Table Design:
    - Integer primary key, never reused (AUTOINCREMENT on SQLite)
    - title: required; content: optional
    - published: defaults to false on both the Python and server side
    - created_at: UTC with timezone, set at insert
    - category_id: nullable foreign key to categories.id. A dangling value is
      rejected by the store (REFERENCE_VIOLATION); deleting the category sets
      it back to NULL.

Index on category_id:
    Speeds up the per-category post count in the category list and the
    posts lookup on the category detail route.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.category import Category


class Post(Base):
    """A blog post, optionally filed under one category."""

    __tablename__ = "posts"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        comment="When this post was created (UTC)",
    )

    category_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    category: Mapped[Optional["Category"]] = relationship(back_populates="posts")

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, title='{self.title}', "
            f"category_id={self.category_id})>"
        )
