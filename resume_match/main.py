import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import sentry_sdk

from resume_match.api.extract import router as extract_router
from resume_match.api.health import router as health_router
from resume_match.api.match import router as match_router
from resume_match.core.config import settings
from resume_match.core.cors import cors_allowed_origins
from resume_match.extraction import ExtractionError

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

logger = logging.getLogger(__name__)

app = FastAPI(title="Resume Match API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


async def _extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("extraction_error path=%s: %s", request.url.path, exc.details or exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


app.add_exception_handler(ExtractionError, _extraction_error_handler)
app.add_exception_handler(StarletteHTTPException, _http_error_handler)

app.include_router(health_router, prefix="/api", tags=["Health"])
app.include_router(extract_router, prefix="/api", tags=["Extraction"])
app.include_router(match_router, prefix="/api", tags=["Match"])
