"""
Blog Backend - Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the JSON contract of the API and the data the
       page templates render.
How:   Field names are snake_case in Python and camelCase on the wire
       (createdAt, categoryId) through a shared alias generator. The per-
       category post count is published as `_count: {posts: n}`.
Who:   Services build them from ORM rows; FastAPI serializes them by alias.

Request bodies are deliberately loose: the only checks are presence checks
done in the services. `published` and `categoryId` are accepted as any JSON
value and coerced by PostService.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for every schema: camelCase aliases, ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Bodies
# ══════════════════════════════════════════════════════════════════════════


class CategoryPayload(ApiModel):
    """Body of POST /api/categories and PUT /api/categories/{id}."""

    name: Optional[str] = None
    description: Optional[str] = None


class PostPayload(ApiModel):
    """
    Body of POST /api/posts and PUT /api/posts/{id}.

    published:   any JSON value, coerced by truthiness
    category_id: any JSON value (wire name categoryId); truthy values are
                 parsed as a base-10 integer, everything else means "none"
    """

    title: Optional[str] = None
    content: Optional[str] = None
    published: Any = None
    category_id: Any = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CategoryResponse(ApiModel):
    id: int
    name: str
    description: Optional[str] = None


class PostResponse(ApiModel):
    """A post without its category; returned by create and update."""

    id: int
    title: str
    content: Optional[str] = None
    published: bool = False
    created_at: datetime
    category_id: Optional[int] = None

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes; stored values are always UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class PostWithCategory(PostResponse):
    """A post with the related category embedded (list and detail)."""

    category: Optional[CategoryResponse] = None


class PostCount(ApiModel):
    posts: int = 0


class CategoryWithCount(CategoryResponse):
    """Item of GET /api/categories."""

    post_count: PostCount = Field(default_factory=PostCount, alias="_count")


class CategoryWithPosts(CategoryResponse):
    """GET /api/categories/{id}: the category and every post filed under it."""

    posts: List[PostResponse] = Field(default_factory=list)


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body for every non-2xx JSON response.

    Example:
        {"error": "Post not found"}
    """

    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
