"""
Blog Backend - BlogStore Tests
================================

What:  Tests for the data-access client and its error classification.
Why:   Every HTTP error the API reports for a store failure is decided by
       classify_integrity_error(); a wrong class changes the status code.
How:   Classification is tested with stand-in driver errors. CRUD is tested
       against a real in-memory SQLite store (conftest `store` fixture).
"""

import pytest
from sqlalchemy import Text
from sqlalchemy.exc import IntegrityError, OperationalError

from app.models.category import Category
from app.models.post import Post
from app.services.results import StoreOutcome
from app.services.store import BlogStore, classify_integrity_error


class FakeDriverError(Exception):
    """Mimics a DBAPI error, optionally carrying a SQLSTATE."""

    def __init__(self, message, sqlstate=None, pgcode=None):
        super().__init__(message)
        if sqlstate is not None:
            self.sqlstate = sqlstate
        if pgcode is not None:
            self.pgcode = pgcode


def integrity_error(orig):
    return IntegrityError("INSERT ...", {}, orig)


class TestClassifyIntegrityError:

    @pytest.mark.parametrize(
        "orig, expected",
        [
            (FakeDriverError("dup", sqlstate="23505"), StoreOutcome.CONFLICT),
            (FakeDriverError("fk", sqlstate="23503"), StoreOutcome.REFERENCE_VIOLATION),
            (FakeDriverError("dup", pgcode="23505"), StoreOutcome.CONFLICT),
            (FakeDriverError("fk", pgcode="23503"), StoreOutcome.REFERENCE_VIOLATION),
            (FakeDriverError("not null", sqlstate="23502"), StoreOutcome.OTHER),
        ],
    )
    def test_sqlstate(self, orig, expected):
        assert classify_integrity_error(integrity_error(orig)) is expected

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("UNIQUE constraint failed: categories.name", StoreOutcome.CONFLICT),
            ('duplicate key value violates unique constraint "x"', StoreOutcome.CONFLICT),
            ("FOREIGN KEY constraint failed", StoreOutcome.REFERENCE_VIOLATION),
            ("NOT NULL constraint failed: posts.title", StoreOutcome.OTHER),
        ],
    )
    def test_message_fallback(self, message, expected):
        assert classify_integrity_error(integrity_error(FakeDriverError(message))) is expected


class TestBlogStoreCategories:

    @pytest.mark.asyncio
    async def test_create_and_get(self, store):
        created = await store.create_category("Tech", "Gadgets")
        fetched = await store.get_category(created.value.id)

        assert created.is_ok
        assert fetched.value.name == "Tech"
        assert fetched.value.posts == []

    @pytest.mark.asyncio
    async def test_duplicate_name_is_conflict(self, store):
        await store.create_category("Tech")
        result = await store.create_category("Tech")

        assert result.outcome is StoreOutcome.CONFLICT

    @pytest.mark.asyncio
    async def test_list_pairs_categories_with_counts(self, store):
        tech = (await store.create_category("Tech")).value
        await store.create_category("Food")
        await store.create_post("A", category_id=tech.id)
        await store.create_post("B", category_id=tech.id)

        rows = (await store.list_categories()).value

        assert [(c.name, n) for c, n in rows] == [("Tech", 2), ("Food", 0)]

    @pytest.mark.asyncio
    async def test_missing_rows_are_not_found(self, store):
        assert (await store.get_category(5)).outcome is StoreOutcome.NOT_FOUND
        assert (await store.update_category(5, {"name": "x"})).outcome is StoreOutcome.NOT_FOUND
        assert (await store.delete_category(5)).outcome is StoreOutcome.NOT_FOUND


class TestBlogStorePosts:

    @pytest.mark.asyncio
    async def test_dangling_category_is_reference_violation(self, store):
        result = await store.create_post("Orphan", category_id=77)

        assert result.outcome is StoreOutcome.REFERENCE_VIOLATION
        assert (await store.list_posts()).value == []

    @pytest.mark.asyncio
    async def test_update_applies_changes(self, store):
        post = (await store.create_post("Draft")).value

        result = await store.update_post(post.id, {"title": "Final", "published": True})

        assert result.value.title == "Final"
        assert result.value.published is True

    @pytest.mark.asyncio
    async def test_deleting_category_nulls_post_reference(self, store):
        tech = (await store.create_category("Tech")).value
        post = (await store.create_post("A", category_id=tech.id)).value

        await store.delete_category(tech.id)
        fetched = (await store.get_post(post.id)).value

        assert fetched.category_id is None
        assert fetched.category is None


class TestBlogStoreFailures:

    @pytest.mark.asyncio
    async def test_operational_error_is_other(self, store):
        async def broken(session):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        result = await store._run("broken", broken)

        assert result.outcome is StoreOutcome.OTHER
        assert result.message == "database is locked"

    @pytest.mark.asyncio
    async def test_ping(self, store):
        assert await store.ping() is True

    @pytest.mark.asyncio
    async def test_ping_fails_after_bad_url(self, tmp_path):
        unreachable = BlogStore.from_url(
            f"sqlite+aiosqlite:///{tmp_path}/missing-dir/blog.db"
        )

        assert await unreachable.ping() is False
        await unreachable.dispose()


class TestBlogStoreIdRange:
    """Ids beyond the INTEGER column range can never match a row."""

    @pytest.mark.asyncio
    async def test_oversized_ids_are_not_found(self, store):
        huge = 10**20

        assert (await store.get_post(huge)).outcome is StoreOutcome.NOT_FOUND
        assert (await store.get_category(huge)).outcome is StoreOutcome.NOT_FOUND
        assert (await store.update_post(huge, {"title": "x"})).outcome is StoreOutcome.NOT_FOUND
        assert (await store.delete_category(huge)).outcome is StoreOutcome.NOT_FOUND

    @pytest.mark.asyncio
    async def test_oversized_category_reference_is_reference_violation(self, store):
        post = (await store.create_post("A")).value

        created = await store.create_post("B", category_id=10**20)
        updated = await store.update_post(post.id, {"category_id": 10**20})

        assert created.outcome is StoreOutcome.REFERENCE_VIOLATION
        assert updated.outcome is StoreOutcome.REFERENCE_VIOLATION


class TestColumnTypes:

    def test_title_and_name_are_unbounded_text(self):
        assert isinstance(Post.__table__.c.title.type, Text)
        assert isinstance(Category.__table__.c.name.type, Text)
