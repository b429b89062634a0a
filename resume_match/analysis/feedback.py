from __future__ import annotations

import re
from dataclasses import dataclass, field

from resume_match.ai.types import TextGenerator

ANALYSIS_LABEL = "RESUME ANALYSIS"
SUGGESTIONS_LABEL = "DETAILED SUGGESTIONS"
KEYWORDS_LABEL = "MISSING KEYWORDS"
ACTION_ITEMS_LABEL = "ACTION ITEMS"
SECTION_LABELS = (ANALYSIS_LABEL, SUGGESTIONS_LABEL, KEYWORDS_LABEL, ACTION_ITEMS_LABEL)

ANALYSIS_PLACEHOLDER = "Analysis not available."
SUGGESTIONS_PLACEHOLDER = "Suggestions not available."
ACTION_ITEMS_PLACEHOLDER = "Action items not available."

_EDGE_DECORATION = " \t\r\n*#_"
_KEYWORD_SEPARATORS = re.compile(r"[,\n]")
_KEYWORD_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")


@dataclass(frozen=True)
class AnalysisSections:
    overall: str = ANALYSIS_PLACEHOLDER
    suggestions: str = SUGGESTIONS_PLACEHOLDER
    action_items: str = ACTION_ITEMS_PLACEHOLDER
    missing_keywords: list[str] = field(default_factory=list)


def build_analysis_prompt(resume: str, job_description: str) -> str:
    return (
        "Analyze this resume against the job description and provide comprehensive feedback.\n\n"
        f"Resume:\n{resume}\n\n"
        f"Job Description:\n{job_description}\n\n"
        "Please provide a detailed analysis in the following format:\n\n"
        f"{ANALYSIS_LABEL}:\n"
        "- Overall match quality: [Excellent/Good/Fair/Poor]\n"
        "- Key strengths: [List 3-5 strengths]\n"
        "- Areas for improvement: [List 3-5 specific improvements]\n\n"
        f"{SUGGESTIONS_LABEL}:\n"
        "- Content improvements: [Specific suggestions for resume content]\n"
        "- Format improvements: [Suggestions for resume structure/layout]\n"
        "- Skill highlighting: [How to better showcase relevant skills]\n\n"
        f"{KEYWORDS_LABEL}: [keyword1, keyword2, keyword3, ...]\n\n"
        f"{ACTION_ITEMS_LABEL}:\n"
        "- Immediate actions: [What to do right away]\n"
        "- Long-term improvements: [What to work on over time]\n\n"
        "Be specific, actionable, and professional in your feedback."
    )


def _section_pattern(label: str) -> re.Pattern[str]:
    others = "|".join(re.escape(other) for other in SECTION_LABELS if other != label)
    return re.compile(rf"{re.escape(label)}:(.*?)(?=(?:{others}):|\Z)", re.DOTALL)


_SECTION_PATTERNS = {label: _section_pattern(label) for label in SECTION_LABELS}


def extract_section(response_text: str, label: str) -> str | None:
    match = _SECTION_PATTERNS[label].search(response_text or "")
    if not match:
        return None
    body = match.group(1).strip(_EDGE_DECORATION)
    return body or None


def parse_keywords(section: str | None) -> list[str]:
    if not section:
        return []
    cleaned = section.replace("[", "").replace("]", "")
    keywords = []
    for item in _KEYWORD_SEPARATORS.split(cleaned):
        keyword = _KEYWORD_BULLET.sub("", item).strip()
        if keyword:
            keywords.append(keyword)
    return keywords


def parse_analysis_response(response_text: str) -> AnalysisSections:
    return AnalysisSections(
        overall=extract_section(response_text, ANALYSIS_LABEL) or ANALYSIS_PLACEHOLDER,
        suggestions=extract_section(response_text, SUGGESTIONS_LABEL) or SUGGESTIONS_PLACEHOLDER,
        action_items=extract_section(response_text, ACTION_ITEMS_LABEL) or ACTION_ITEMS_PLACEHOLDER,
        missing_keywords=parse_keywords(extract_section(response_text, KEYWORDS_LABEL)),
    )


class GenerativeFeedback:
    """Section-structured feedback from a generative language model."""

    def __init__(self, generator: TextGenerator) -> None:
        self._generator = generator
        self.name = generator.name

    async def analyze(self, resume: str, job_description: str, score: int) -> AnalysisSections:
        completion = await self._generator.complete(build_analysis_prompt(resume, job_description))
        return parse_analysis_response(completion)
