# services/tracker/schemas/topics.py
from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import Field, StringConstraints

from schemas.base import CamelModel

# ---------- Create ----------


# Titles are stripped before their length is checked.
SubtopicTitle = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)
]
TopicTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=120)]


class SubtopicIn(CamelModel):
    title: SubtopicTitle
    description: Optional[str] = Field(default=None, max_length=500)


class TopicCreate(CamelModel):
    title: TopicTitle
    # Omit to use a predefined plan for well-known topics.
    subtopics: Optional[List[SubtopicIn]] = None


class TopicCreated(CamelModel):
    topic_id: str
    topic_title: str
    subtopic_count: int
    resource_count: int


# ---------- Read ----------


class SubtopicOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    order_index: int
    status: str
    completed_at: Optional[datetime] = None


class ResourceOut(CamelModel):
    id: str
    title: str
    url: str
    type: str
    rank: int


class TopicSummary(CamelModel):
    id: str
    title: str
    created_at: Optional[datetime] = None
    completed: int
    total: int


class TopicDetail(CamelModel):
    id: str
    title: str
    created_at: Optional[datetime] = None
    subtopics: List[SubtopicOut]
    resources: List[ResourceOut]
    test_id: Optional[str] = None
    test_status: Optional[str] = None


# ---------- Update ----------


class SubtopicUpdate(CamelModel):
    status: Literal["pending", "completed"]
