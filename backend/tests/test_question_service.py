"""
FakeStack Backend — Question Service Tests
============================================

What:  Tests for QuestionService against an in-memory SQLite database,
       plus pure tests of search parsing and filtering.

What we test:
    ✅ save_question stores one copy of each tag and an askDateTime
    ✅ Views record each username once
    ✅ Vote toggle: add, cancel, flip; never in both lists
    ✅ Orderings: newest, unanswered, active, mostViewed, unknown token
    ✅ Search: keywords OR tags, case rules, blank search, empty brackets
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from fakestack.models.answer import Answer
from fakestack.models.question import Question, VoteType
from fakestack.models.tag import Tag
from fakestack.results import is_error
from fakestack.services.answer_service import answer_service
from fakestack.services.question_service import QuestionService, parse_search
from fakestack.services.tag_service import tag_service

BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


async def make_question(db, title, tag_names=("general",), asked_by="alice", text="body", minutes=0):
    tags = [await tag_service.add_tag(db, name) for name in tag_names]
    question = await QuestionService().save_question(db, title, text, asked_by, tags)
    question.ask_date_time = BASE_TIME + timedelta(minutes=minutes)
    await db.flush()
    return question


def transient_question(title, text="", tags=()):
    return Question(
        title=title,
        text=text,
        asked_by="alice",
        ask_date_time=BASE_TIME,
        tags=[Tag(name=name) for name in tags],
    )


class TestSaveQuestion:

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_duplicate_tags_are_stored_once(self, db_session):
        react = await tag_service.add_tag(db_session, "react")

        question = await self.service.save_question(
            db_session, "How do hooks work?", "Details", "alice", [react, react]
        )

        assert not is_error(question)
        assert [t.name for t in question.tags] == ["react"]
        assert question.ask_date_time is not None
        assert question.views == []
        assert question.up_votes == [] and question.down_votes == []

    @pytest.mark.asyncio
    async def test_missing_fields_are_rejected(self, db_session):
        react = await tag_service.add_tag(db_session, "react")

        assert is_error(await self.service.save_question(db_session, "", "text", "alice", [react]))
        assert is_error(await self.service.save_question(db_session, "title", "text", "alice", []))


class TestViews:

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_same_user_counted_once(self, db_session):
        question = await make_question(db_session, "Q")

        await self.service.fetch_and_increment_question_views_by_id(db_session, str(question.id), "bob")
        result = await self.service.fetch_and_increment_question_views_by_id(db_session, str(question.id), "bob")

        assert result.view_usernames == ["bob"]

    @pytest.mark.asyncio
    async def test_different_users_are_all_recorded(self, db_session):
        question = await make_question(db_session, "Q")

        await self.service.fetch_and_increment_question_views_by_id(db_session, str(question.id), "bob")
        result = await self.service.fetch_and_increment_question_views_by_id(db_session, str(question.id), "carol")

        assert sorted(result.view_usernames) == ["bob", "carol"]

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(self, db_session):
        result = await self.service.fetch_and_increment_question_views_by_id(
            db_session, str(uuid.uuid4()), "bob"
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_malformed_id_is_store_error(self, db_session):
        result = await self.service.fetch_and_increment_question_views_by_id(db_session, "not-an-id", "bob")

        assert is_error(result)


class TestVotes:

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_first_upvote(self, db_session):
        question = await make_question(db_session, "Q")

        result = await self.service.add_vote_to_question(db_session, str(question.id), "bob", VoteType.UP)

        assert result.msg == "Question upvoted successfully"
        assert result.up_votes == ["bob"]
        assert result.down_votes == []

    @pytest.mark.asyncio
    async def test_repeat_upvote_cancels(self, db_session):
        """Casting the same vote again removes it instead of counting it twice."""
        question = await make_question(db_session, "Q")

        await self.service.add_vote_to_question(db_session, str(question.id), "bob", VoteType.UP)
        result = await self.service.add_vote_to_question(db_session, str(question.id), "bob", VoteType.UP)

        assert result.msg == "Upvote cancelled successfully"
        assert result.up_votes == []
        assert result.down_votes == []

    @pytest.mark.asyncio
    async def test_repeat_downvote_cancels(self, db_session):
        question = await make_question(db_session, "Q")

        await self.service.add_vote_to_question(db_session, str(question.id), "bob", VoteType.DOWN)
        result = await self.service.add_vote_to_question(db_session, str(question.id), "bob", VoteType.DOWN)

        assert result.msg == "Downvote cancelled successfully"
        assert result.down_votes == []

    @pytest.mark.asyncio
    async def test_downvote_after_upvote_moves_user(self, db_session):
        """A user is never in both upVotes and downVotes."""
        question = await make_question(db_session, "Q")

        await self.service.add_vote_to_question(db_session, str(question.id), "bob", VoteType.UP)
        result = await self.service.add_vote_to_question(db_session, str(question.id), "bob", VoteType.DOWN)

        assert result.msg == "Question downvoted successfully"
        assert result.up_votes == []
        assert result.down_votes == ["bob"]

    @pytest.mark.asyncio
    async def test_votes_from_several_users(self, db_session):
        question = await make_question(db_session, "Q")

        await self.service.add_vote_to_question(db_session, str(question.id), "bob", VoteType.UP)
        await self.service.add_vote_to_question(db_session, str(question.id), "carol", VoteType.DOWN)
        result = await self.service.add_vote_to_question(db_session, str(question.id), "dave", VoteType.UP)

        assert sorted(result.up_votes) == ["bob", "dave"]
        assert result.down_votes == ["carol"]

    @pytest.mark.asyncio
    async def test_unknown_question_is_store_error(self, db_session):
        result = await self.service.add_vote_to_question(db_session, str(uuid.uuid4()), "bob", VoteType.UP)

        assert is_error(result)
        assert result.error == "Question not found!"


class TestOrderings:

    def setup_method(self):
        self.service = QuestionService()

    @pytest.mark.asyncio
    async def test_newest_first(self, db_session):
        await make_question(db_session, "old", minutes=0)
        await make_question(db_session, "new", minutes=10)
        await make_question(db_session, "mid", minutes=5)

        questions = await self.service.get_questions_by_order(db_session, "newest")

        assert [q.title for q in questions] == ["new", "mid", "old"]

    @pytest.mark.asyncio
    async def test_unknown_order_falls_back_to_newest(self, db_session):
        """Unrecognized order tokens are not an error."""
        await make_question(db_session, "old", minutes=0)
        await make_question(db_session, "new", minutes=10)

        questions = await self.service.get_questions_by_order(db_session, "sideways")

        assert [q.title for q in questions] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_unanswered_only(self, db_session):
        answered = await make_question(db_session, "answered", minutes=0)
        await make_question(db_session, "open", minutes=5)
        await answer_service.add_answer_to_question(db_session, str(answered.id), "An answer", "bob")

        questions = await self.service.get_questions_by_order(db_session, "unanswered")

        assert [q.title for q in questions] == ["open"]

    @pytest.mark.asyncio
    async def test_active_by_latest_answer_then_unanswered(self, db_session):
        first = await make_question(db_session, "first", minutes=0)
        second = await make_question(db_session, "second", minutes=5)
        await make_question(db_session, "open", minutes=10)

        first.answers.append(Answer(text="a", ans_by="bob", ans_date_time=BASE_TIME + timedelta(hours=2), comments=[]))
        second.answers.append(Answer(text="b", ans_by="bob", ans_date_time=BASE_TIME + timedelta(hours=1), comments=[]))
        await db_session.flush()

        questions = await self.service.get_questions_by_order(db_session, "active")

        assert [q.title for q in questions] == ["first", "second", "open"]

    @pytest.mark.asyncio
    async def test_most_viewed(self, db_session):
        quiet = await make_question(db_session, "quiet", minutes=10)
        popular = await make_question(db_session, "popular", minutes=0)
        for user in ("bob", "carol", "dave"):
            await self.service.fetch_and_increment_question_views_by_id(db_session, str(popular.id), user)
        await self.service.fetch_and_increment_question_views_by_id(db_session, str(quiet.id), "bob")

        questions = await self.service.get_questions_by_order(db_session, "mostViewed")

        assert [q.title for q in questions] == ["popular", "quiet"]


class TestSearch:

    def setup_method(self):
        self.service = QuestionService()
        self.questions = [
            transient_question("React hooks explained", tags=["react"]),
            transient_question("Python decorators", text="How do they WORK?", tags=["python"]),
            transient_question("SQL joins", tags=["sql", "databases"]),
        ]

    def test_parse_search_splits_words_and_tags(self):
        assert parse_search("hooks [react] State") == (["hooks", "state"], ["react"])

    def test_blank_search_returns_everything(self):
        assert self.service.filter_questions_by_search(self.questions, "") == self.questions
        assert self.service.filter_questions_by_search(self.questions, "   ") == self.questions

    def test_keyword_matches_title_or_text_case_insensitively(self):
        titles = [q.title for q in self.service.filter_questions_by_search(self.questions, "work")]

        assert titles == ["Python decorators"]

    def test_tag_filter_is_exact(self):
        assert self.service.filter_questions_by_search(self.questions, "[React]") == []

        titles = [q.title for q in self.service.filter_questions_by_search(self.questions, "[databases]")]
        assert titles == ["SQL joins"]

    def test_keyword_or_tag_match_keeps_question(self):
        titles = [q.title for q in self.service.filter_questions_by_search(self.questions, "decorators [sql]")]

        assert titles == ["Python decorators", "SQL joins"]

    def test_empty_brackets_are_ignored(self):
        """Empty brackets name no tag and are not keywords either."""
        assert parse_search("[]") == ([], [])
        assert self.service.filter_questions_by_search(self.questions, "[]") == self.questions
        assert self.service.filter_questions_by_search(self.questions, "[ ]") == self.questions

        titles = [q.title for q in self.service.filter_questions_by_search(self.questions, "joins []")]
        assert titles == ["SQL joins"]


class TestLatestAnswerTime:

    def test_unanswered_question_has_none(self):
        assert transient_question("Q").latest_answer_time is None

    def test_most_recent_answer_wins(self):
        question = transient_question("Q")
        question.answers = [
            Answer(text="a", ans_by="bob", ans_date_time=BASE_TIME + timedelta(hours=3)),
            Answer(text="b", ans_by="carol", ans_date_time=datetime(2024, 6, 1, 13, 0)),
        ]

        assert question.latest_answer_time == BASE_TIME + timedelta(hours=3)
