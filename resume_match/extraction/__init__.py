from .errors import (
    EmptyFileError,
    ExtractionError,
    ExtractionFailure,
    InsufficientTextError,
    InvalidUploadError,
    NoFileError,
    ParseFailureKind,
    ResourceError,
    SizeLimitError,
    StorageMissingError,
    UnsupportedFormatError,
    UnsupportedTypeError,
    UploadValidationError,
    classify_parse_error,
)
from .extractor import TextExtractor, normalize_text
from .models import UploadAccepted, UploadedDocument, UploadRejected, UploadRejectionKind
from .parsers import DocumentParseError, DocumentParser, PdfTextParser, PlainTextParser, WordTextParser

__all__ = [
    "DocumentParseError",
    "DocumentParser",
    "EmptyFileError",
    "ExtractionError",
    "ExtractionFailure",
    "InsufficientTextError",
    "InvalidUploadError",
    "NoFileError",
    "ParseFailureKind",
    "PdfTextParser",
    "PlainTextParser",
    "ResourceError",
    "SizeLimitError",
    "StorageMissingError",
    "TextExtractor",
    "UnsupportedFormatError",
    "UnsupportedTypeError",
    "UploadAccepted",
    "UploadRejected",
    "UploadRejectionKind",
    "UploadValidationError",
    "UploadedDocument",
    "WordTextParser",
    "classify_parse_error",
    "normalize_text",
]
