# services/tracker/routers/tests.py
from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from db import get_db
from deps.auth import current_user, require_client
from models import Test, TestQuestion, Topic
from question_library import build_question_library, question_count, select_questions
from schemas.tests import (
    GenerateTestRequest,
    GenerateTestResponse,
    SkipTestRequest,
    SubmitTestRequest,
    SubmitTestResponse,
    TestOut,
)

logger = logging.getLogger("learning-tracker")

router = APIRouter(prefix="/tests", tags=["tests"], dependencies=[Depends(require_client)])


def _normalize(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def _public_questions(test: Test) -> List[Dict[str, Any]]:
    # never leak correct answers while the test is open
    return [{"id": q.id, "prompt": q.prompt, "options": q.options} for q in test.questions]


def _existing_test(db: Session, topic_id: str, user_id: str) -> Optional[Test]:
    return db.scalars(
        select(Test).where(Test.topic_id == topic_id, Test.user_id == user_id)
    ).one_or_none()


@router.post("/generate", response_model=GenerateTestResponse)
def generate_test(
    req: GenerateTestRequest,
    user_id: str = Depends(current_user),
    db: Session = Depends(get_db),
):
    test = _existing_test(db, req.topic_id, user_id)

    if test and not req.force_new:
        if test.status == "attempted":
            raise HTTPException(status_code=409, detail="Test already attempted for this topic.")
        if test.status == "skipped":
            raise HTTPException(status_code=409, detail="Test was skipped for this topic.")
        if test.status == "offered":
            return {"test_id": test.id, "questions": _public_questions(test)}

    topic = db.get(Topic, req.topic_id)
    if not topic or topic.user_id != user_id:
        raise HTTPException(status_code=404, detail="Topic not found")

    subtopics = topic.subtopics
    completed = sum(1 for s in subtopics if s.status == "completed")
    titles = [s.title for s in subtopics]

    if req.subtopic_id is not None:
        selected = next((s for s in subtopics if s.id == req.subtopic_id), None)
        if not selected:
            raise HTTPException(status_code=404, detail="Subtopic not found")
        titles = [selected.title]

    count = question_count(completed, single_subtopic=req.subtopic_id is not None)
    library = build_question_library(titles, user_id, topic.title)
    picked = select_questions(library, user_id, topic.id, req.subtopic_id, count)

    if test:
        # Regenerating: clear old rows and reopen the same test
        test.questions.clear()
        test.status = "offered"
        test.score = None
        test.max_score = None
        test.attempted_at = None
    else:
        test = Test(topic_id=topic.id, user_id=user_id, status="offered")
        db.add(test)

    test.total_questions = len(picked)
    for position, q in enumerate(picked):
        test.questions.append(
            TestQuestion(
                position=position,
                prompt=q.prompt,
                options=q.options,
                correct_answer=q.correct_answer,
                explanation=q.explanation,
            )
        )

    db.commit()
    db.refresh(test)
    logger.info(
        "test generated id=%s topic=%s questions=%d library=%d force_new=%s",
        test.id,
        topic.id,
        len(picked),
        len(library),
        req.force_new,
    )

    return {"test_id": test.id, "questions": _public_questions(test)}


@router.post("/skip")
def skip_test(
    req: SkipTestRequest,
    user_id: str = Depends(current_user),
    db: Session = Depends(get_db),
):
    topic = db.get(Topic, req.topic_id)
    if not topic or topic.user_id != user_id:
        raise HTTPException(status_code=404, detail="Topic not found")

    test = _existing_test(db, topic.id, user_id)
    if test:
        test.questions.clear()
        test.status = "skipped"
        test.total_questions = 0
        test.score = None
        test.max_score = None
        test.attempted_at = None
    else:
        db.add(Test(topic_id=topic.id, user_id=user_id, status="skipped", total_questions=0))

    db.commit()
    logger.info("test skipped topic=%s", topic.id)
    return {"ok": True}


@router.post("/{test_id}/submit", response_model=SubmitTestResponse)
def submit_test(
    test_id: str,
    req: SubmitTestRequest,
    user_id: str = Depends(current_user),
    db: Session = Depends(get_db),
):
    test = db.get(Test, test_id)
    if not test or test.user_id != user_id:
        raise HTTPException(status_code=404, detail="Test not found")
    if test.status == "attempted":
        raise HTTPException(status_code=409, detail="This test was already submitted.")
    if test.status == "skipped":
        raise HTTPException(status_code=409, detail="This test was skipped.")

    answers = {a.question_id: a.answer or "" for a in req.answers}
    score = 0

    for q in test.questions:
        answer = answers.get(q.id, "")
        q.user_answer = answer
        q.is_correct = _normalize(answer) == _normalize(q.correct_answer)
        if q.is_correct:
            score += 1

    max_score = len(test.questions)
    test.status = "attempted"
    test.score = score
    test.max_score = max_score
    test.attempted_at = datetime.now(UTC)

    db.commit()
    logger.info("test submitted id=%s score=%d/%d", test_id, score, max_score)
    return {"score": score, "max_score": max_score}


@router.get("/{test_id}", response_model=TestOut)
def get_test(test_id: str, user_id: str = Depends(current_user), db: Session = Depends(get_db)):
    test = db.get(Test, test_id)
    if not test or test.user_id != user_id:
        raise HTTPException(status_code=404, detail="Test not found")

    if test.status == "attempted":
        questions = [
            {
                "id": q.id,
                "prompt": q.prompt,
                "options": q.options,
                "correct_answer": q.correct_answer,
                "explanation": q.explanation,
                "user_answer": q.user_answer,
                "is_correct": q.is_correct,
            }
            for q in test.questions
        ]
    else:
        questions = _public_questions(test)

    return {
        "id": test.id,
        "topic_id": test.topic_id,
        "status": test.status,
        "total_questions": test.total_questions,
        "score": test.score,
        "max_score": test.max_score,
        "attempted_at": test.attempted_at,
        "questions": questions,
    }
