"""
FakeStack Backend — Tag Service Tests
=======================================

What we test:
    ✅ add_tag creates unseen tags and reuses existing ones
    ✅ process_tags drops duplicate names and keeps input order
    ✅ process_tags returns [] when any tag fails to resolve
    ✅ get_tag_count_map counts questions per tag, 0 for unused tags, None with no tags
    ✅ get_tag_count_map reports lookup failures as StoreError
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from fakestack.models.tag import Tag
from fakestack.results import StoreError, is_error
from fakestack.schemas.tag import TagInput
from fakestack.services.question_service import question_service
from fakestack.services.tag_service import TagService


class TestAddTag:

    def setup_method(self):
        self.service = TagService()

    @pytest.mark.asyncio
    async def test_creates_new_tag(self, db_session):
        tag = await self.service.add_tag(db_session, "react", "A UI library")

        assert tag is not None
        assert tag.id is not None
        assert tag.name == "react"
        assert tag.description == "A UI library"

    @pytest.mark.asyncio
    async def test_existing_tag_is_reused_unchanged(self, db_session):
        first = await self.service.add_tag(db_session, "react", "original")
        second = await self.service.add_tag(db_session, "react", "ignored")

        assert second.id == first.id
        assert second.description == "original"

        count = await db_session.scalar(select(func.count()).select_from(Tag))
        assert count == 1

    @pytest.mark.asyncio
    async def test_tag_names_are_case_sensitive(self, db_session):
        lower = await self.service.add_tag(db_session, "react")
        upper = await self.service.add_tag(db_session, "React")

        assert lower.id != upper.id

    @pytest.mark.asyncio
    async def test_database_error_returns_none(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))

        assert await self.service.add_tag(mock_db_session, "react") is None


class TestProcessTags:

    def setup_method(self):
        self.service = TagService()

    @pytest.mark.asyncio
    async def test_duplicate_names_resolve_once(self, db_session):
        tags = await self.service.process_tags(
            db_session,
            [TagInput(name="react"), TagInput(name="hooks"), TagInput(name="react")],
        )

        assert [t.name for t in tags] == ["react", "hooks"]

    @pytest.mark.asyncio
    async def test_any_failure_rejects_whole_list(self, db_session):
        """One unresolvable tag empties the result so the question is not saved."""
        real_add = self.service.add_tag

        async def flaky_add(db, name, description=""):
            if name == "broken":
                return None
            return await real_add(db, name, description)

        with patch.object(self.service, "add_tag", side_effect=flaky_add):
            tags = await self.service.process_tags(
                db_session,
                [TagInput(name="react"), TagInput(name="broken")],
            )

        assert tags == []


class TestTagCountMap:

    def setup_method(self):
        self.service = TagService()

    @pytest.mark.asyncio
    async def test_no_tags_returns_none(self, db_session):
        assert await self.service.get_tag_count_map(db_session) is None

    @pytest.mark.asyncio
    async def test_counts_questions_per_tag(self, db_session):
        react = await self.service.add_tag(db_session, "react")
        hooks = await self.service.add_tag(db_session, "hooks")
        unused = await self.service.add_tag(db_session, "cobol")

        await question_service.save_question(db_session, "Q1", "text", "alice", [react, hooks])
        await question_service.save_question(db_session, "Q2", "text", "bob", [react])

        counts = await self.service.get_tag_count_map(db_session)

        assert counts == {react.name: 2, hooks.name: 1, unused.name: 0}

    @pytest.mark.asyncio
    async def test_lookup_failure_is_store_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))

        result = await self.service.get_tag_count_map(mock_db_session)

        assert isinstance(result, StoreError)

    @pytest.mark.asyncio
    async def test_tags_without_questions_count_zero(self, db_session):
        await self.service.add_tag(db_session, "react")
        await self.service.add_tag(db_session, "hooks")

        counts = await self.service.get_tag_count_map(db_session)

        assert counts == {"react": 0, "hooks": 0}

    @pytest.mark.asyncio
    async def test_question_lookup_failure_is_store_error(self, mock_db_session):
        """Tags load but the question lookup fails."""
        tag_result = MagicMock()
        tag_result.scalars.return_value.all.return_value = [Tag(name="react")]
        mock_db_session.execute = AsyncMock(
            side_effect=[tag_result, OperationalError("SELECT", {}, Exception("down"))]
        )

        result = await self.service.get_tag_count_map(mock_db_session)

        assert isinstance(result, StoreError)
        assert result.error == "Error when fetching questions"


class TestGetTagByName:

    @pytest.mark.asyncio
    async def test_unknown_tag_is_store_error(self, db_session):
        result = await TagService().get_tag_by_name(db_session, "missing")

        assert is_error(result)
        assert "missing" in result.error
