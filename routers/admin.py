from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from deps.auth import require_admin
from question_library import build_question_library
from schemas.library import LibraryPreviewRequest, LibraryPreviewResponse

logger = logging.getLogger("learning-tracker")

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/library-preview", response_model=LibraryPreviewResponse)
def library_preview(req: LibraryPreviewRequest):
    """Full question library for one user/topic, answers included."""
    library = build_question_library(req.subtopics, req.user_id, req.topic_title)
    logger.info("library preview topic=%r questions=%d", req.topic_title, len(library))
    return {
        "ok": True,
        "count": len(library),
        "questions": [q.model_dump() for q in library],
    }
