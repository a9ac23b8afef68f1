"""
Blog Backend - Category Service
=================================

What:  Business rules for categories: presence checks, then one store call,
       then the outcome table.
Who:   Called by the /api/categories route handlers.

Each method either returns a response schema or raises one of the exceptions
in app.exceptions (via unwrap), which the global handlers render.
"""

import logging
from typing import List

from app.exceptions import ValidationError
from app.schemas.blog import (
    CategoryPayload,
    CategoryResponse,
    CategoryWithCount,
    CategoryWithPosts,
    PostCount,
)
from app.services.results import unwrap
from app.services.store import BlogStore

logger = logging.getLogger(__name__)

ENTITY = "Category"


class CategoryService:
    """
    CRUD over categories.

    Stateless apart from the injected store; one instance per request is fine.
    """

    def __init__(self, store: BlogStore):
        self.store = store

    async def list_categories(self) -> List[CategoryWithCount]:
        """Every category with `_count.posts`."""
        rows = unwrap(await self.store.list_categories(), ENTITY)
        return [
            CategoryWithCount(
                id=category.id,
                name=category.name,
                description=category.description,
                post_count=PostCount(posts=count),
            )
            for category, count in rows
        ]

    async def create_category(self, payload: CategoryPayload) -> CategoryResponse:
        """
        Create a category.

        Raises:
            ValidationError: name missing or empty
            ConflictError:   name already taken
        """
        if not payload.name:
            raise ValidationError("Name is required", field="name")

        category = unwrap(
            await self.store.create_category(payload.name, payload.description),
            ENTITY,
        )
        logger.info("Category %d created: %s", category.id, category.name)
        return CategoryResponse.model_validate(category)

    async def get_category(self, category_id: int) -> CategoryWithPosts:
        category = unwrap(await self.store.get_category(category_id), ENTITY)
        return CategoryWithPosts.model_validate(category)

    async def update_category(
        self, category_id: int, payload: CategoryPayload
    ) -> CategoryResponse:
        """
        Apply the fields present in the body; absent fields stay as they are.

        A name that is present must still be non-empty.
        """
        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes and not changes["name"]:
            raise ValidationError("Name is required", field="name")

        category = unwrap(
            await self.store.update_category(category_id, changes),
            ENTITY,
        )
        return CategoryResponse.model_validate(category)

    async def delete_category(self, category_id: int) -> None:
        unwrap(await self.store.delete_category(category_id), ENTITY)
        logger.info("Category %d deleted", category_id)
