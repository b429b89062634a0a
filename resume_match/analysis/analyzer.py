from __future__ import annotations

import logging
from typing import Awaitable, Callable, Protocol, TypeVar

from resume_match.ai.errors import describe_failure
from resume_match.ai.types import SimilarityScorer
from resume_match.analysis.fallback import JaccardSimilarity, KeywordFeedback
from resume_match.analysis.feedback import AnalysisSections
from resume_match.analysis.metrics import build_metrics, build_recommendations, to_score
from resume_match.schemas.match import Analysis, MatchRequest, MatchResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FeedbackSource(Protocol):
    name: str

    async def analyze(self, resume: str, job_description: str, score: int) -> AnalysisSections: ...


async def with_fallback(
    primary: Callable[[], Awaitable[T]],
    fallback: Callable[[], Awaitable[T]],
    *,
    service: str,
    method: str,
) -> tuple[T, str | None]:
    """Run ``primary`` once; on any failure run ``fallback`` and return a warning.

    There is no retry: one upstream attempt, then the local computation.
    """
    try:
        return await primary(), None
    except Exception as exc:
        message = describe_failure(exc)
        logger.warning("upstream_failed service=%s method=%s: %s", service, method, message)
        return await fallback(), f"{service}: {message}. Using fallback {method} method."


class MatchAnalyzer:
    def __init__(
        self,
        scorer: SimilarityScorer,
        feedback: FeedbackSource,
        fallback_scorer: SimilarityScorer | None = None,
        fallback_feedback: FeedbackSource | None = None,
    ) -> None:
        self._scorer = scorer
        self._feedback = feedback
        self._fallback_scorer = fallback_scorer or JaccardSimilarity()
        self._fallback_feedback = fallback_feedback or KeywordFeedback()

    async def _score(self, scorer: SimilarityScorer, request: MatchRequest) -> int:
        values = await scorer.similarity(request.resume, [request.job_description])
        return to_score(values[0])

    async def analyze(self, request: MatchRequest) -> MatchResult:
        warnings: list[str] = []

        score, warning = await with_fallback(
            lambda: self._score(self._scorer, request),
            lambda: self._score(self._fallback_scorer, request),
            service=self._scorer.name,
            method="scoring",
        )
        if warning:
            warnings.append(warning)
        logger.info("match_score score=%s fallback=%s", score, warning is not None)

        sections, warning = await with_fallback(
            lambda: self._feedback.analyze(request.resume, request.job_description, score),
            lambda: self._fallback_feedback.analyze(request.resume, request.job_description, score),
            service=self._feedback.name,
            method="analysis",
        )
        if warning:
            warnings.append(warning)
        logger.info(
            "match_analysis missing_keywords=%s fallback=%s",
            len(sections.missing_keywords),
            warning is not None,
        )

        return MatchResult(
            score=score,
            analysis=Analysis(
                overall=sections.overall,
                suggestions=sections.suggestions,
                action_items=sections.action_items,
            ),
            missing_keywords=list(sections.missing_keywords),
            metrics=build_metrics(request.resume, request.job_description, score, sections.missing_keywords),
            recommendations=build_recommendations(score, sections.missing_keywords),
            warnings=warnings,
        )
