# services/tracker/routers/progress.py
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from db import get_db
from deps.auth import current_user, require_client
from models import Subtopic, Test, Topic
from schemas.progress import ProgressOut

router = APIRouter(tags=["progress"], dependencies=[Depends(require_client)])

RECENT_TOPICS = 5


@router.get("/progress", response_model=ProgressOut)
def progress_summary(user_id: str = Depends(current_user), db: Session = Depends(get_db)):
    """
    Plain numbers describing how a learner is doing across all topics.
    """
    titles = db.scalars(
        select(Topic.title).where(Topic.user_id == user_id).order_by(Topic.created_at.desc())
    ).all()
    statuses = db.scalars(select(Subtopic.status).where(Subtopic.user_id == user_id)).all()
    tests = db.scalars(select(Test).where(Test.user_id == user_id)).all()

    completed = sum(1 for s in statuses if s == "completed")
    attempted = [t for t in tests if t.status == "attempted"]

    # tests with no questions would divide by zero
    ratios = [t.score / t.max_score for t in attempted if t.score is not None and t.max_score]
    avg_score = round(sum(ratios) / len(ratios), 2) if ratios else 0

    return {
        "total_topics": len(titles),
        "completed_subtopics": completed,
        "pending_subtopics": len(statuses) - completed,
        "attempted_tests": len(attempted),
        "avg_score": avg_score,
        "recent_topics": list(titles[:RECENT_TOPICS]),
    }
