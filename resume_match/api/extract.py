import asyncio
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from resume_match.extraction import ExtractionError, TextExtractor, UploadRejected
from resume_match.extraction.upload import read_upload, rejection_error
from resume_match.api.dependencies import get_text_extractor
from resume_match.schemas.extraction import ErrorResponse, ExtractionResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/extract-text",
    response_model=ExtractionResult,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="Extract plain text from an uploaded resume",
)
async def extract_text(request: Request, extractor: TextExtractor = Depends(get_text_extractor)):
    try:
        outcome = await read_upload(request, extractor.config)
        if isinstance(outcome, UploadRejected):
            raise rejection_error(outcome, extractor.config)
        return await asyncio.to_thread(extractor.extract, outcome.document)
    except ExtractionError:
        raise
    except Exception as exc:
        logger.exception("extract_text_unexpected_error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to process uploaded file. Please try again.", "details": str(exc)},
        )
