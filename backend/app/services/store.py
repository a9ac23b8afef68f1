"""
Blog Backend - Data-Access Client (BlogStore)
===============================================

What:  The single handle the application holds on the relational store.
       Exposes typed CRUD for Category and Post and returns StoreResult
       values instead of raising ORM exceptions.
How:   Owns one AsyncEngine and a session factory. Every operation runs in
       its own session and transaction through _run(), which commits on OK,
       rolls back on failure, and classifies the failure into a StoreOutcome.
Who:   Built once by create_app() (or by tests, against in-memory SQLite),
       stored on app.state, injected into services through get_store().
When:  Engine connects on first use; dispose() runs at application shutdown.

Error classification (decided here and nowhere else):
    IntegrityError, unique violation       → CONFLICT
    IntegrityError, foreign key violation  → REFERENCE_VIOLATION
    any other SQLAlchemyError              → OTHER (message passed through)
    row missing on get/update/delete       → NOT_FOUND
    id outside the INTEGER range           → NOT_FOUND (REFERENCE_VIOLATION
                                             for a post's category id)

Detection uses the driver's SQLSTATE when it exposes one (asyncpg, psycopg)
and falls back to the error text (SQLite reports no SQLSTATE).
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.orm import selectinload

from app.database import Base, build_engine, build_session_factory
from app.models.category import Category
from app.models.post import Post
from app.services.results import StoreOutcome, StoreResult

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

# Primary and foreign keys are 32-bit INTEGER columns
MAX_RECORD_ID = 2**31 - 1


def classify_integrity_error(exc: IntegrityError) -> StoreOutcome:
    """Map a constraint failure to CONFLICT, REFERENCE_VIOLATION or OTHER."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION:
        return StoreOutcome.CONFLICT
    if code == FOREIGN_KEY_VIOLATION:
        return StoreOutcome.REFERENCE_VIOLATION

    detail = str(orig if orig is not None else exc).lower()
    if "unique" in detail or "duplicate key" in detail:
        return StoreOutcome.CONFLICT
    if "foreign key" in detail:
        return StoreOutcome.REFERENCE_VIOLATION
    return StoreOutcome.OTHER


def _error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


def _in_id_range(record_id: int) -> bool:
    """False for ids no row can hold; the drivers raise on them instead of matching nothing."""
    return -MAX_RECORD_ID - 1 <= record_id <= MAX_RECORD_ID


def _unknown_category(category_id: int) -> StoreResult:
    return StoreResult.failure(
        StoreOutcome.REFERENCE_VIOLATION, f"category id {category_id} out of range"
    )


class BlogStore:
    """
    Typed CRUD over categories and posts.

    Every public coroutine returns a StoreResult; none of them raises for
    store failures. Callers decide what an outcome means over HTTP
    (see app.services.results.unwrap).
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: Optional[str] = None) -> "BlogStore":
        """Build a store on a fresh engine (settings.database_url by default)."""
        return cls(build_engine(database_url))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def create_schema(self) -> None:
        """Create all tables from the ORM metadata (local runs and tests)."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self._engine.dispose()

    async def ping(self) -> bool:
        """Run SELECT 1; False when the store cannot be reached."""
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Store ping failed: %s", str(e))
            return False
        return True

    # ── Transaction runner ────────────────────────────────────────────────

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[StoreResult]],
    ) -> StoreResult:
        async with self._session_factory() as session:
            try:
                result = await work(session)
                if result.is_ok:
                    await session.commit()
                return result
            except IntegrityError as e:
                await session.rollback()
                outcome = classify_integrity_error(e)
                if outcome is StoreOutcome.OTHER:
                    logger.error("%s failed: %s", operation, _error_message(e))
                else:
                    logger.info("%s rejected by store: %s", operation, outcome.value)
                return StoreResult.failure(outcome, _error_message(e))
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("%s failed: %s", operation, _error_message(e), exc_info=True)
                return StoreResult.failure(StoreOutcome.OTHER, _error_message(e))

    # ── Categories ────────────────────────────────────────────────────────

    async def list_categories(self) -> StoreResult[List[Tuple[Category, int]]]:
        """All categories ordered by id, each paired with its post count."""

        async def work(session: AsyncSession) -> StoreResult:
            stmt = (
                select(Category, func.count(Post.id))
                .outerjoin(Post, Post.category_id == Category.id)
                .group_by(Category.id)
                .order_by(Category.id)
            )
            rows = (await session.execute(stmt)).all()
            return StoreResult.ok([(category, count) for category, count in rows])

        return await self._run("list_categories", work)

    async def create_category(
        self, name: str, description: Optional[str] = None
    ) -> StoreResult[Category]:
        async def work(session: AsyncSession) -> StoreResult:
            category = Category(name=name, description=description)
            session.add(category)
            await session.flush()
            return StoreResult.ok(category)

        return await self._run("create_category", work)

    async def get_category(self, category_id: int) -> StoreResult[Category]:
        """Category with its posts loaded, or NOT_FOUND."""
        if not _in_id_range(category_id):
            return StoreResult.not_found()

        async def work(session: AsyncSession) -> StoreResult:
            stmt = (
                select(Category)
                .options(selectinload(Category.posts))
                .where(Category.id == category_id)
            )
            category = (await session.execute(stmt)).scalar_one_or_none()
            if category is None:
                return StoreResult.not_found()
            return StoreResult.ok(category)

        return await self._run("get_category", work)

    async def update_category(
        self, category_id: int, changes: Dict[str, Any]
    ) -> StoreResult[Category]:
        return await self._run(
            "update_category", self._updater(Category, category_id, changes)
        )

    async def delete_category(self, category_id: int) -> StoreResult[None]:
        return await self._run("delete_category", self._deleter(Category, category_id))

    # ── Posts ─────────────────────────────────────────────────────────────

    async def list_posts(self) -> StoreResult[List[Post]]:
        """All posts ordered by id, each with its category loaded."""

        async def work(session: AsyncSession) -> StoreResult:
            stmt = select(Post).options(selectinload(Post.category)).order_by(Post.id)
            return StoreResult.ok(list((await session.execute(stmt)).scalars().all()))

        return await self._run("list_posts", work)

    async def create_post(
        self,
        title: str,
        content: Optional[str] = None,
        published: bool = False,
        category_id: Optional[int] = None,
    ) -> StoreResult[Post]:
        if category_id is not None and not _in_id_range(category_id):
            return _unknown_category(category_id)

        async def work(session: AsyncSession) -> StoreResult:
            post = Post(
                title=title,
                content=content,
                published=published,
                category_id=category_id,
            )
            session.add(post)
            await session.flush()
            return StoreResult.ok(post)

        return await self._run("create_post", work)

    async def get_post(self, post_id: int) -> StoreResult[Post]:
        """Post with its category loaded, or NOT_FOUND."""
        if not _in_id_range(post_id):
            return StoreResult.not_found()

        async def work(session: AsyncSession) -> StoreResult:
            stmt = (
                select(Post)
                .options(selectinload(Post.category))
                .where(Post.id == post_id)
            )
            post = (await session.execute(stmt)).scalar_one_or_none()
            if post is None:
                return StoreResult.not_found()
            return StoreResult.ok(post)

        return await self._run("get_post", work)

    async def update_post(self, post_id: int, changes: Dict[str, Any]) -> StoreResult[Post]:
        category_id = changes.get("category_id")
        if category_id is not None and not _in_id_range(category_id):
            return _unknown_category(category_id)
        return await self._run("update_post", self._updater(Post, post_id, changes))

    async def delete_post(self, post_id: int) -> StoreResult[None]:
        return await self._run("delete_post", self._deleter(Post, post_id))

    # ── Shared work builders ──────────────────────────────────────────────

    @staticmethod
    def _updater(model, record_id: int, changes: Dict[str, Any]):
        async def work(session: AsyncSession) -> StoreResult:
            if not _in_id_range(record_id):
                return StoreResult.not_found()
            record = await session.get(model, record_id)
            if record is None:
                return StoreResult.not_found()
            for field, value in changes.items():
                setattr(record, field, value)
            await session.flush()
            return StoreResult.ok(record)

        return work

    @staticmethod
    def _deleter(model, record_id: int):
        async def work(session: AsyncSession) -> StoreResult:
            if not _in_id_range(record_id):
                return StoreResult.not_found()
            record = await session.get(model, record_id)
            if record is None:
                return StoreResult.not_found()
            await session.delete(record)
            await session.flush()
            return StoreResult.ok()

        return work
