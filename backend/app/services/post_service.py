"""
Blog Backend - Post Service
=============================

What:  Business rules for posts: presence check on title, coercion of
       `published` and `categoryId`, one store call, then the outcome table.
Who:   Called by the /api/posts route handlers and by the page routes.

Update semantics:
    title, content, published   applied only when present in the body
    categoryId                  always applied; absent or falsy detaches
                                the post from its category
"""

import logging
import re
from typing import Any, Dict, List, Optional

from app.exceptions import ReferenceViolationError, ValidationError
from app.schemas.blog import PostPayload, PostResponse, PostWithCategory
from app.services.results import unwrap
from app.services.store import BlogStore

logger = logging.getLogger(__name__)

ENTITY = "Post"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def coerce_published(value: Any) -> bool:
    """Truthiness; absent means False."""
    return bool(value)


def coerce_category_id(value: Any) -> Optional[int]:
    """
    Parse a categoryId from the request body.

    Falsy values (missing, null, 0, "") mean "no category". Anything else
    must read as a base-10 integer; a value that does not can never reference
    an existing category, so it is reported the same way a dangling id is.
    """
    if not value:
        return None
    if isinstance(value, float):
        # JSON numbers like 2.0 name category 2
        if not value.is_integer():
            raise ReferenceViolationError(context={"category_id": value})
        return int(value)
    candidate = str(value).strip()
    if not _INTEGER.fullmatch(candidate):
        raise ReferenceViolationError(context={"category_id": candidate})
    return int(candidate, 10)


class PostService:
    """CRUD over posts."""

    def __init__(self, store: BlogStore):
        self.store = store

    async def list_posts(self) -> List[PostWithCategory]:
        posts = unwrap(await self.store.list_posts(), ENTITY)
        return [PostWithCategory.model_validate(post) for post in posts]

    async def create_post(self, payload: PostPayload) -> PostResponse:
        """
        Create a post.

        Raises:
            ValidationError:         title missing or empty
            ReferenceViolationError: categoryId does not name an existing category
        """
        if not payload.title:
            raise ValidationError("Title is required", field="title")

        post = unwrap(
            await self.store.create_post(
                title=payload.title,
                content=payload.content,
                published=coerce_published(payload.published),
                category_id=coerce_category_id(payload.category_id),
            ),
            ENTITY,
        )
        logger.info("Post %d created", post.id)
        return PostResponse.model_validate(post)

    async def get_post(self, post_id: int) -> PostWithCategory:
        post = unwrap(await self.store.get_post(post_id), ENTITY)
        return PostWithCategory.model_validate(post)

    async def update_post(self, post_id: int, payload: PostPayload) -> PostResponse:
        """
        Update a post; see the module docstring for which fields apply.

        Raises:
            ValidationError:         title present but empty
            NotFoundError:           no post with this id
            ReferenceViolationError: categoryId does not name an existing category
        """
        present = payload.model_fields_set
        changes: Dict[str, Any] = {}

        if "title" in present:
            if not payload.title:
                raise ValidationError("Title is required", field="title")
            changes["title"] = payload.title
        if "content" in present:
            changes["content"] = payload.content
        if "published" in present:
            changes["published"] = coerce_published(payload.published)
        changes["category_id"] = coerce_category_id(payload.category_id)

        post = unwrap(await self.store.update_post(post_id, changes), ENTITY)
        return PostResponse.model_validate(post)

    async def delete_post(self, post_id: int) -> None:
        unwrap(await self.store.delete_post(post_id), ENTITY)
        logger.info("Post %d deleted", post_id)
