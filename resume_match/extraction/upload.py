from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from starlette.datastructures import UploadFile
from starlette.requests import Request

from resume_match.core.config import ExtractorConfig
from resume_match.extraction.errors import (
    ExtractionError,
    InvalidUploadError,
    NoFileError,
    SizeLimitError,
)
from resume_match.extraction.models import (
    UploadAccepted,
    UploadedDocument,
    UploadOutcome,
    UploadRejected,
    UploadRejectionKind,
)
from resume_match.extraction.storage import discard

logger = logging.getLogger(__name__)

CHUNK_BYTES = 64 * 1024


async def _spool_to_disk(upload: UploadFile, config: ExtractorConfig) -> UploadOutcome:
    filename = (upload.filename or "").strip()
    extension = Path(filename).suffix.lower() if filename else ""
    fd, raw_path = tempfile.mkstemp(prefix="resume-upload-", suffix=extension)
    path = Path(raw_path)
    total = 0
    too_large = False
    try:
        with os.fdopen(fd, "wb") as handle:
            while True:
                chunk = await upload.read(CHUNK_BYTES)
                if not chunk:
                    break
                total += len(chunk)
                if total > config.max_upload_bytes:
                    too_large = True
                    break
                handle.write(chunk)
    except Exception:
        discard(path)
        raise

    if too_large:
        discard(path)
        logger.info("upload_rejected_size file=%s limit=%s", filename, config.max_upload_bytes)
        return UploadRejected(
            UploadRejectionKind.SIZE_LIMIT,
            f"maxFileSize exceeded: received more than {config.max_upload_bytes} bytes",
        )

    document = UploadedDocument(
        storage_path=path,
        file_name=filename or None,
        extension=extension,
        size_bytes=total,
    )
    return UploadAccepted(document)


async def read_upload(request: Request, config: ExtractorConfig, field: str = "file") -> UploadOutcome:
    """Parse the multipart body and spool the ``field`` attachment to a temp file.

    Client mistakes come back as ``UploadRejected``; the caller owns the
    temporary file of an ``UploadAccepted`` document.
    """
    async with request.form() as form:
        entries = form.getlist(field)
        if not entries:
            return UploadRejected(UploadRejectionKind.NO_FILE)
        upload = entries[0]
        if not isinstance(upload, UploadFile):
            return UploadRejected(UploadRejectionKind.INVALID_UPLOAD, f"field '{field}' is not a file")
        return await _spool_to_disk(upload, config)


def rejection_error(rejected: UploadRejected, config: ExtractorConfig) -> ExtractionError:
    if rejected.kind is UploadRejectionKind.SIZE_LIMIT:
        return SizeLimitError(config.max_upload_bytes, details=rejected.message or None)
    if rejected.kind is UploadRejectionKind.INVALID_UPLOAD:
        return InvalidUploadError()
    return NoFileError()
