import logging
import random

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from resume_match.ai.errors import is_auth_failure
from resume_match.analysis import MatchAnalyzer
from resume_match.api.dependencies import get_match_analyzer
from resume_match.schemas.extraction import ErrorResponse
from resume_match.schemas.match import FallbackPayload, MatchRequest, MatchResult

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS_MESSAGE = "Resume and job description are required"


def _failure(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Analysis failed. Please try again later.", "details": str(exc)},
    )


def _auth_fallback() -> FallbackPayload:
    return FallbackPayload(
        score=random.randrange(30, 70),
        suggestions=(
            "Unable to generate AI suggestions due to API issues. "
            "Please ensure your resume highlights relevant skills and experience."
        ),
        missing_keywords=["API unavailable"],
    )


@router.post(
    "/match",
    response_model=MatchResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Score a resume against a job description",
)
async def match(request: Request, analyzer: MatchAnalyzer = Depends(get_match_analyzer)):
    try:
        body = await request.json()
    except ValueError as exc:
        logger.warning("match_invalid_body: %s", exc)
        return _failure(exc)

    try:
        payload = MatchRequest.model_validate(body)
    except ValidationError:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": REQUIRED_FIELDS_MESSAGE})

    logger.info("match_start resume_len=%s jd_len=%s", len(payload.resume), len(payload.job_description))
    try:
        return await analyzer.analyze(payload)
    except Exception as exc:
        if is_auth_failure(exc):
            logger.error("match_upstream_auth_failed: %s", exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "API authentication failed. Please check your API keys.",
                    "fallback": _auth_fallback().model_dump(by_alias=True),
                },
            )
        logger.exception("match_failed")
        return _failure(exc)
