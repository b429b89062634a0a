from .analyzer import FeedbackSource, MatchAnalyzer, with_fallback
from .fallback import JaccardSimilarity, KeywordFeedback, keyword_fallback_analysis
from .feedback import AnalysisSections, GenerativeFeedback, build_analysis_prompt, parse_analysis_response

__all__ = [
    "AnalysisSections",
    "FeedbackSource",
    "GenerativeFeedback",
    "JaccardSimilarity",
    "KeywordFeedback",
    "MatchAnalyzer",
    "build_analysis_prompt",
    "keyword_fallback_analysis",
    "parse_analysis_response",
    "with_fallback",
]
