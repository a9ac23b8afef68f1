"""
Blog Backend - Category SQLAlchemy Model
==========================================

What:  ORM model for the `categories` table.
Who:   Read and written by BlogStore; tracked by Alembic.

Table Design:
    - Integer primary key with AUTOINCREMENT on SQLite, so a deleted id is
      never handed out again (PostgreSQL identity columns behave this way
      already)
    - name: unique, enforced by the store; duplicates surface as CONFLICT
    - description: optional free text
    - posts: one-to-many; deleting a category leaves the database to null out
      posts.category_id (ON DELETE SET NULL, see Post.category_id)
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.post import Post


class Category(Base):
    """A named grouping of posts."""

    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        comment="Display name, unique across categories",
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    # passive_deletes: the ORM does not load and nullify children itself;
    # the foreign key's ON DELETE SET NULL does it in the database.
    posts: Mapped[List["Post"]] = relationship(
        back_populates="category",
        passive_deletes=True,
        order_by="Post.id",
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
