from .extraction import ErrorResponse, ExtractionResult
from .match import Analysis, FallbackPayload, MatchRequest, MatchResult, Metrics, Priority, Recommendations

__all__ = [
    "Analysis",
    "ErrorResponse",
    "ExtractionResult",
    "FallbackPayload",
    "MatchRequest",
    "MatchResult",
    "Metrics",
    "Priority",
    "Recommendations",
]
