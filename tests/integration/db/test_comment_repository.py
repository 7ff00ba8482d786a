"""
Integration Tests for Comment Repository.

Runs the repository against the test database.
"""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.core.exceptions import NotFoundError
from guestbook.core.utils import utc_now
from guestbook.models.comment import Comment
from guestbook.repositories.comment import CommentRepository


@pytest.fixture
def repo(db_session: AsyncSession) -> CommentRepository:
    return CommentRepository(db_session)


class TestInsert:
    """Tests for CommentRepository.insert."""

    @pytest.mark.asyncio
    async def test_assigns_id(self, repo: CommentRepository):
        """Should populate the generated id."""
        comment = await repo.insert(Comment(name="job", text="hello"))

        assert comment.id == 1

    @pytest.mark.asyncio
    async def test_created_equals_updated(self, repo: CommentRepository):
        """Should stamp both timestamps with one instant."""
        comment = await repo.insert(Comment(name="job", text="hello"))

        assert comment.created == comment.updated

    @pytest.mark.asyncio
    async def test_overrides_caller_timestamps(self, repo: CommentRepository):
        """Should ignore timestamps set before insert."""
        stale = utc_now() - timedelta(days=30)
        comment = await repo.insert(
            Comment(name="job", text="hello", created=stale, updated=stale)
        )

        assert comment.created > stale

    @pytest.mark.asyncio
    async def test_rejects_text_over_storage_bound(self, repo: CommentRepository):
        """Should refuse text longer than the column allows."""
        with pytest.raises(IntegrityError):
            await repo.insert(Comment(name="job", text="a" * 400))

    @pytest.mark.asyncio
    async def test_rejects_name_over_storage_bound(self, repo: CommentRepository):
        """Should refuse a name longer than the column allows."""
        with pytest.raises(IntegrityError):
            await repo.insert(Comment(name="n" * 201, text="hello"))


class TestFindById:
    """Tests for CommentRepository.find_by_id."""

    @pytest.mark.asyncio
    async def test_returns_inserted_comment(self, repo: CommentRepository):
        inserted = await repo.insert(Comment(name="job", text="hello"))

        found = await repo.find_by_id(inserted.id)

        assert found.id == inserted.id
        assert found.text == "hello"

    @pytest.mark.asyncio
    async def test_raises_not_found(self, repo: CommentRepository):
        """Should raise NotFoundError for a missing id."""
        with pytest.raises(NotFoundError) as exc_info:
            await repo.find_by_id(42)

        assert exc_info.value.message == "Not Found"


class TestListRecent:
    """Tests for CommentRepository.list_recent."""

    @pytest.mark.asyncio
    async def test_empty_table(self, repo: CommentRepository):
        assert await repo.list_recent() == []

    @pytest.mark.asyncio
    async def test_newest_first_with_limit(
        self,
        repo: CommentRepository,
        db_session: AsyncSession,
    ):
        """Should return the newest comments first, capped at the limit."""
        base = utc_now()
        for i in range(5):
            stamp = base + timedelta(minutes=i)
            db_session.add(Comment(text=f"c{i}", created=stamp, updated=stamp))
        await db_session.flush()

        comments = await repo.list_recent(limit=3)

        assert [c.text for c in comments] == ["c4", "c3", "c2"]

    @pytest.mark.asyncio
    async def test_ties_broken_by_id(
        self,
        repo: CommentRepository,
        db_session: AsyncSession,
    ):
        """Should order comments with equal created time by id descending."""
        stamp = utc_now()
        for i in range(3):
            db_session.add(Comment(text=f"c{i}", created=stamp, updated=stamp))
        await db_session.flush()

        comments = await repo.list_recent()

        ids = [c.id for c in comments]
        assert ids == sorted(ids, reverse=True)
