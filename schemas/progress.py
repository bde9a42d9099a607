# services/tracker/schemas/progress.py
from typing import List

from schemas.base import CamelModel


class ProgressOut(CamelModel):
    total_topics: int
    completed_subtopics: int
    pending_subtopics: int
    attempted_tests: int
    avg_score: float
    recent_topics: List[str]
