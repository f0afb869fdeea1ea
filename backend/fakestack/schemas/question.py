"""
FakeStack Backend — Question, Answer and Comment Schemas
==========================================================

What:  Request bodies for the question/answer/comment endpoints and the
       response models that shape stored questions for the client.
How:   Response models are built from ORM objects with the from_* class
       methods; votes and views are flattened to lists of usernames.

Question JSON:
    {
        "_id": "0d5c...", "title": "...", "text": "...",
        "tags": [{"_id": "...", "name": "react", "description": "..."}],
        "answers": [{"_id": "...", "text": "...", "ansBy": "...",
                     "ansDateTime": "...", "comments": [...]}],
        "askedBy": "alice", "askDateTime": "2024-06-06T00:00:00Z",
        "views": ["alice"], "upVotes": [], "downVotes": ["bob"],
        "comments": []
    }
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from fakestack.models.answer import Answer
from fakestack.models.comment import Comment
from fakestack.models.question import Question
from fakestack.schemas.common import WireModel
from fakestack.schemas.tag import TagInput, TagResponse
from fakestack.utils import as_utc


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════
# Every field is Optional: presence and non-emptiness are checked by the
# handlers, which answer with the endpoint's fixed 400 message.


class AddQuestionRequest(WireModel):
    title: Optional[str] = None
    text: Optional[str] = None
    tags: Optional[List[TagInput]] = None
    asked_by: Optional[str] = None


class VoteRequest(WireModel):
    qid: Optional[str] = None
    username: Optional[str] = None


class AnswerInput(WireModel):
    text: Optional[str] = None
    ans_by: Optional[str] = None


class AddAnswerRequest(WireModel):
    qid: Optional[str] = None
    ans: Optional[AnswerInput] = None


class CommentInput(WireModel):
    text: Optional[str] = None
    comment_by: Optional[str] = None


class AddCommentRequest(WireModel):
    id: Optional[str] = None
    type: Optional[str] = Field(default=None, description="'question' or 'answer'")
    comment: Optional[CommentInput] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CommentResponse(WireModel):
    id: uuid.UUID = Field(alias="_id")
    text: str
    comment_by: str
    comment_date_time: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            text=comment.text,
            comment_by=comment.comment_by,
            comment_date_time=as_utc(comment.comment_date_time),
        )


class AnswerResponse(WireModel):
    id: uuid.UUID = Field(alias="_id")
    text: str
    ans_by: str
    ans_date_time: datetime
    comments: List[CommentResponse] = Field(default_factory=list)

    @classmethod
    def from_answer(cls, answer: Answer) -> "AnswerResponse":
        return cls(
            id=answer.id,
            text=answer.text,
            ans_by=answer.ans_by,
            ans_date_time=as_utc(answer.ans_date_time),
            comments=[CommentResponse.from_comment(c) for c in answer.comments],
        )


class QuestionResponse(WireModel):
    id: uuid.UUID = Field(alias="_id")
    title: str
    text: str
    tags: List[TagResponse]
    answers: List[AnswerResponse]
    asked_by: str
    ask_date_time: datetime
    views: List[str] = Field(description="Usernames that have viewed the question, once each")
    up_votes: List[str]
    down_votes: List[str]
    comments: List[CommentResponse]

    @classmethod
    def from_question(cls, question: Question) -> "QuestionResponse":
        return cls(
            id=question.id,
            title=question.title,
            text=question.text,
            tags=[TagResponse.from_tag(tag) for tag in question.tags],
            answers=[AnswerResponse.from_answer(a) for a in question.answers],
            asked_by=question.asked_by,
            ask_date_time=as_utc(question.ask_date_time),
            views=question.view_usernames,
            up_votes=question.up_votes,
            down_votes=question.down_votes,
            comments=[CommentResponse.from_comment(c) for c in question.comments],
        )


class VoteResponse(WireModel):
    """Result of an up/down vote: the message and both derived vote lists."""
    msg: str
    up_votes: List[str]
    down_votes: List[str]
