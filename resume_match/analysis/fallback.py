"""Deterministic local stand-ins for the two upstream AI services."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from resume_match.analysis.feedback import AnalysisSections

MAX_MISSING_KEYWORDS = 10


def significant_tokens(text: str, min_length: int) -> list[str]:
    """Lower-cased whitespace tokens strictly longer than ``min_length``."""
    return [token for token in (text or "").lower().split() if len(token) > min_length]


def jaccard_similarity(left: set[str], right: set[str]) -> float:
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


class JaccardSimilarity:
    name = "Word overlap"

    async def similarity(self, source: str, candidates: Sequence[str]) -> list[float]:
        source_words = set(significant_tokens(source, 2))
        return [jaccard_similarity(source_words, set(significant_tokens(item, 2))) for item in candidates]


def keyword_fallback_analysis(resume: str, job_description: str, score: int) -> AnalysisSections:
    resume_words = significant_tokens(resume, 3)
    job_words = significant_tokens(job_description, 3)
    resume_freq = Counter(resume_words)
    job_freq = Counter(job_words)

    missing = [word for word in job_freq if word not in resume_freq][:MAX_MISSING_KEYWORDS]
    common = [word for word in resume_freq if word in job_freq][:5]

    overall = (
        f"Based on word overlap analysis, your resume has a {score}% match with the job description.\n\n"
        "Key observations:\n"
        f"- Resume word count: {len(resume_words)}\n"
        f"- Job description word count: {len(job_words)}\n"
        f"- Common keywords: {', '.join(common)}"
    )
    suggestions = (
        "Improvement suggestions:\n"
        f"- Add missing keywords: {', '.join(missing[:5])}\n"
        "- Ensure your resume highlights relevant experience\n"
        "- Use industry-specific terminology from the job description\n"
        "- Quantify achievements where possible"
    )
    action_items = (
        "Immediate actions:\n"
        "- Review and incorporate missing keywords\n"
        "- Align resume language with job description\n"
        "- Highlight relevant skills and experience\n"
        "- Consider adding specific examples that match job requirements"
    )
    return AnalysisSections(
        overall=overall,
        suggestions=suggestions,
        action_items=action_items,
        missing_keywords=missing,
    )


class KeywordFeedback:
    name = "Keyword frequency"

    async def analyze(self, resume: str, job_description: str, score: int) -> AnalysisSections:
        return keyword_fallback_analysis(resume, job_description, score)
