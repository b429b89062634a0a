from __future__ import annotations

from functools import lru_cache

from resume_match.ai.config import load_ai_config, load_similarity_config
from resume_match.ai.factory import get_similarity_scorer, get_text_generator
from resume_match.analysis import GenerativeFeedback, MatchAnalyzer
from resume_match.core.config import settings
from resume_match.extraction import TextExtractor


@lru_cache(maxsize=1)
def get_text_extractor() -> TextExtractor:
    return TextExtractor(config=settings.extractor_config())


@lru_cache(maxsize=1)
def get_match_analyzer() -> MatchAnalyzer:
    generator = get_text_generator(load_ai_config(settings))
    scorer = get_similarity_scorer(load_similarity_config(settings))
    return MatchAnalyzer(scorer=scorer, feedback=GenerativeFeedback(generator))
