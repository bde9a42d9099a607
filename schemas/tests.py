# services/tracker/schemas/tests.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from schemas.base import CamelModel

# ---------- Generate ----------


class GenerateTestRequest(CamelModel):
    topic_id: str = Field(min_length=1, max_length=36)
    subtopic_id: Optional[str] = Field(default=None, min_length=1, max_length=36)
    force_new: bool = False


class QuestionOut(CamelModel):
    id: str
    prompt: str
    options: List[str]


class GenerateTestResponse(CamelModel):
    test_id: str
    questions: List[QuestionOut]


# ---------- Submit / skip ----------


class AnswerIn(CamelModel):
    question_id: str
    answer: Optional[str] = None


class SubmitTestRequest(CamelModel):
    answers: List[AnswerIn]


class SubmitTestResponse(CamelModel):
    score: int
    max_score: int


class SkipTestRequest(CamelModel):
    topic_id: str = Field(min_length=1, max_length=36)


# ---------- Read ----------


class ReviewedQuestionOut(QuestionOut):
    # only filled in once the test has been attempted
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None
    user_answer: Optional[str] = None
    is_correct: Optional[bool] = None


class TestOut(CamelModel):
    id: str
    topic_id: str
    status: str
    total_questions: int
    score: Optional[int] = None
    max_score: Optional[int] = None
    attempted_at: Optional[datetime] = None
    questions: List[ReviewedQuestionOut] = []
