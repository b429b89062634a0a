from __future__ import annotations

import math
from typing import Sequence

from resume_match.schemas.match import Metrics, Priority, Recommendations

MAX_FOCUS_AREAS = 5


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_score(similarity: float) -> int:
    return max(0, min(100, round_half_up(similarity * 100)))


def word_count(text: str) -> int:
    return len((text or "").split())


def keyword_density(missing_keyword_count: int) -> int:
    return max(0, 100 - 10 * min(missing_keyword_count, 10))


def priority_for_score(score: int) -> Priority:
    if score < 50:
        return "High"
    if score < 75:
        return "Medium"
    return "Low"


def build_metrics(resume: str, job_description: str, score: int, missing_keywords: Sequence[str]) -> Metrics:
    return Metrics(
        resume_word_count=word_count(resume),
        job_description_word_count=word_count(job_description),
        keyword_density=keyword_density(len(missing_keywords)),
        similarity_score=score,
    )


def build_recommendations(score: int, missing_keywords: Sequence[str]) -> Recommendations:
    return Recommendations(
        priority=priority_for_score(score),
        estimated_improvement=max(0, 100 - score),
        focus_areas=list(missing_keywords[:MAX_FOCUS_AREAS]),
    )
