# services/tracker/schemas/library.py
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from schemas.base import CamelModel


class LibraryPreviewRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=64)
    topic_title: str = Field(min_length=1, max_length=120)
    subtopics: List[str] = []


class LibraryQuestionOut(CamelModel):
    prompt: str
    options: List[str]
    correct_answer: str
    explanation: Optional[str] = None


class LibraryPreviewResponse(CamelModel):
    ok: bool
    count: int
    questions: List[LibraryQuestionOut]
