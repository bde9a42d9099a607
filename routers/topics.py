# services/tracker/routers/topics.py
from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from db import get_db
from deps.auth import current_user, require_client
from models import Resource, Subtopic, Topic
from schemas.topics import (
    ResourceOut,
    SubtopicOut,
    SubtopicUpdate,
    TopicCreate,
    TopicCreated,
    TopicDetail,
    TopicSummary,
)
from topic_templates import predefined_plan

logger = logging.getLogger("learning-tracker")

router = APIRouter(prefix="/topics", tags=["topics"], dependencies=[Depends(require_client)])


def _owned_topic(db: Session, topic_id: str, user_id: str) -> Topic:
    topic = db.get(Topic, topic_id)
    if not topic or topic.user_id != user_id:
        raise HTTPException(status_code=404, detail="Topic not found")
    return topic


@router.post("", response_model=TopicCreated, status_code=201)
def create_topic(
    req: TopicCreate,
    user_id: str = Depends(current_user),
    db: Session = Depends(get_db),
):
    plan = predefined_plan(req.title)

    if req.subtopics:
        subtopics = [s.model_dump() for s in req.subtopics]
        resources = []
    elif plan:
        subtopics = plan["subtopics"]
        resources = plan["resources"]
    else:
        raise HTTPException(
            status_code=422,
            detail=f'No predefined plan for "{req.title}"; supply subtopics.',
        )

    topic = Topic(user_id=user_id, title=req.title)
    for index, s in enumerate(subtopics):
        topic.subtopics.append(
            Subtopic(
                user_id=user_id,
                title=s["title"],
                description=s.get("description"),
                order_index=index,
                status="pending",
            )
        )
    for rank, r in enumerate(resources):
        topic.resources.append(
            Resource(user_id=user_id, title=r["title"], url=r["url"], type=r["type"], rank=rank)
        )

    db.add(topic)
    db.commit()
    db.refresh(topic)
    logger.info(
        "topic created id=%s subtopics=%d resources=%d predefined=%s",
        topic.id,
        len(subtopics),
        len(resources),
        not req.subtopics,
    )

    return {
        "topic_id": topic.id,
        "topic_title": topic.title,
        "subtopic_count": len(subtopics),
        "resource_count": len(resources),
    }


@router.get("", response_model=List[TopicSummary])
def list_topics(user_id: str = Depends(current_user), db: Session = Depends(get_db)):
    topics = db.scalars(
        select(Topic).where(Topic.user_id == user_id).order_by(Topic.created_at.desc())
    ).all()

    return [
        {
            "id": t.id,
            "title": t.title,
            "created_at": t.created_at,
            "completed": sum(1 for s in t.subtopics if s.status == "completed"),
            "total": len(t.subtopics),
        }
        for t in topics
    ]


@router.get("/{topic_id}", response_model=TopicDetail)
def get_topic(topic_id: str, user_id: str = Depends(current_user), db: Session = Depends(get_db)):
    topic = _owned_topic(db, topic_id, user_id)
    return {
        "id": topic.id,
        "title": topic.title,
        "created_at": topic.created_at,
        "subtopics": [SubtopicOut.model_validate(s) for s in topic.subtopics],
        "resources": [ResourceOut.model_validate(r) for r in topic.resources],
        "test_id": topic.test.id if topic.test else None,
        "test_status": topic.test.status if topic.test else None,
    }


@router.patch("/{topic_id}/subtopics/{subtopic_id}", response_model=SubtopicOut)
def update_subtopic(
    topic_id: str,
    subtopic_id: str,
    req: SubtopicUpdate,
    user_id: str = Depends(current_user),
    db: Session = Depends(get_db),
):
    sub = db.get(Subtopic, subtopic_id)
    if not sub or sub.topic_id != topic_id or sub.user_id != user_id:
        raise HTTPException(status_code=404, detail="Subtopic not found")

    if req.status != sub.status:
        sub.status = req.status
        sub.completed_at = datetime.now(UTC) if req.status == "completed" else None
        db.commit()
        db.refresh(sub)

    return SubtopicOut.model_validate(sub)


@router.delete("/{topic_id}")
def delete_topic(topic_id: str, user_id: str = Depends(current_user), db: Session = Depends(get_db)):
    topic = _owned_topic(db, topic_id, user_id)
    db.delete(topic)
    db.commit()
    logger.info("topic deleted id=%s", topic_id)
    return {"ok": True}
