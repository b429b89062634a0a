from __future__ import annotations

import logging
import re
from typing import Mapping

from resume_match.core.config import ExtractorConfig
from resume_match.extraction.errors import (
    EmptyFileError,
    ExtractionFailure,
    InsufficientTextError,
    InvalidUploadError,
    NoFileError,
    StorageMissingError,
    UnsupportedTypeError,
)
from resume_match.extraction.models import UploadedDocument
from resume_match.extraction.parsers import DocumentParser, default_parsers
from resume_match.extraction.storage import discard
from resume_match.schemas.extraction import ExtractionResult

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINE_RUN = re.compile(r"\n\s*\n")


def normalize_text(raw: str) -> str:
    text = _WHITESPACE_RUN.sub(" ", raw or "")
    text = _BLANK_LINE_RUN.sub("\n", text)
    return text.strip()


class TextExtractor:
    def __init__(
        self,
        config: ExtractorConfig | None = None,
        parsers: Mapping[str, DocumentParser] | None = None,
    ) -> None:
        self.config = config or ExtractorConfig()
        self._parsers = dict(parsers) if parsers is not None else dict(default_parsers())

    def extract(self, document: UploadedDocument | None) -> ExtractionResult:
        """Turn an uploaded document into normalized text.

        The document's temporary file is always deleted before this returns,
        whatever the outcome.
        """
        if document is None:
            raise NoFileError()
        try:
            return self._extract(document)
        finally:
            discard(document.storage_path)

    def _extract(self, document: UploadedDocument) -> ExtractionResult:
        if document.storage_path is None or not document.file_name:
            raise InvalidUploadError()
        path = document.storage_path
        if not path.exists():
            logger.warning("upload_storage_missing path=%s", path)
            raise StorageMissingError()
        if path.stat().st_size == 0:
            raise EmptyFileError()

        extension = document.extension.lower()
        if extension not in self.config.allowed_extensions or extension not in self._parsers:
            raise UnsupportedTypeError(extension, self.config.allowed_extensions)

        logger.info(
            "extract_text_start file=%s ext=%s size=%s",
            document.file_name,
            extension,
            document.size_bytes,
        )
        try:
            raw_text = self._parsers[extension].extract_text(path)
        except Exception as exc:
            failure = ExtractionFailure.from_exception(exc)
            logger.error(
                "extract_text_failed file=%s ext=%s kind=%s: %s",
                document.file_name,
                extension,
                failure.kind.value,
                exc,
            )
            raise failure from exc

        text = normalize_text(raw_text)
        logger.info("extract_text_done file=%s raw_len=%s clean_len=%s", document.file_name, len(raw_text), len(text))
        if len(text) < self.config.min_text_chars:
            raise InsufficientTextError(self.config.min_text_chars)

        return ExtractionResult(
            text=text,
            file_type=extension,
            file_name=document.file_name,
            text_length=len(text),
        )
