from __future__ import annotations

from enum import Enum


class ExtractionError(Exception):
    status_code = 400
    default_message = "Failed to process uploaded file. Please try again."

    def __init__(self, message: str | None = None, *, details: str | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_payload(self) -> dict[str, str]:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class UploadValidationError(ExtractionError):
    pass


class NoFileError(UploadValidationError):
    default_message = "No file uploaded"


class InvalidUploadError(UploadValidationError):
    default_message = "Invalid file upload"


_EXTENSION_DISPLAY_ORDER = (".pdf", ".doc", ".docx", ".txt")


def describe_size(num_bytes: int) -> str:
    for unit, scale in (("MB", 1024 * 1024), ("KB", 1024)):
        if num_bytes >= scale:
            return f"{num_bytes / scale:g}{unit}"
    return f"{num_bytes} bytes"


def describe_extensions(extensions) -> str:
    known = [ext for ext in _EXTENSION_DISPLAY_ORDER if ext in extensions]
    ordered = known + sorted(set(extensions) - set(known))
    names = [ext.lstrip(".").upper() for ext in ordered]
    if len(names) <= 2:
        return " or ".join(names)
    return f"{', '.join(names[:-1])}, or {names[-1]}"


class SizeLimitError(UploadValidationError):
    status_code = 413

    def __init__(self, max_bytes: int, *, details: str | None = None):
        super().__init__(
            f"File size exceeds the {describe_size(max_bytes)} limit. Please upload a smaller file.",
            details=details,
        )
        self.max_bytes = max_bytes


class ResourceError(ExtractionError):
    pass


class StorageMissingError(ResourceError):
    default_message = "Uploaded file not found"


class EmptyFileError(ResourceError):
    default_message = "Uploaded file is empty"


class UnsupportedFormatError(ExtractionError):
    default_message = "File type not supported. Please upload PDF, DOC, DOCX, or TXT files."


class UnsupportedTypeError(UnsupportedFormatError):
    def __init__(self, extension: str, allowed_extensions=_EXTENSION_DISPLAY_ORDER):
        shown = extension or "(none)"
        super().__init__(
            f"Unsupported file type: {shown}. Please upload {describe_extensions(allowed_extensions)} files."
        )
        self.extension = extension


class InsufficientTextError(ExtractionError):
    def __init__(self, min_chars: int):
        super().__init__(
            "Could not extract meaningful text from the file. "
            f"Please ensure the file contains readable text (minimum {min_chars} characters)."
        )
        self.min_chars = min_chars


class ParseFailureKind(str, Enum):
    PASSWORD_PROTECTED = "password_protected"
    CORRUPTED = "corrupted"
    WORD_FORMAT = "word_format"
    PDF_FORMAT = "pdf_format"
    GENERIC = "generic"


PARSE_FAILURE_MESSAGES = {
    ParseFailureKind.PASSWORD_PROTECTED: (
        "The file appears to be password-protected. Please remove the password and try again."
    ),
    ParseFailureKind.CORRUPTED: "The file appears to be corrupted. Please try uploading a different copy.",
    ParseFailureKind.WORD_FORMAT: (
        "Failed to process Word document. The file might be corrupted or in an unsupported format."
    ),
    ParseFailureKind.PDF_FORMAT: (
        "Failed to process PDF. The file might be corrupted, password-protected, or contain only images."
    ),
    ParseFailureKind.GENERIC: "Failed to extract text from file.",
}

# Ordered: the first rule whose needle appears in the lower-cased message wins.
# This is string matching on library error text, so it is a best-effort hint
# for the user, not a reliable taxonomy.
_CLASSIFICATION_RULES: tuple[tuple[ParseFailureKind, tuple[str, ...]], ...] = (
    (ParseFailureKind.PASSWORD_PROTECTED, ("password", "encrypt", "decrypt")),
    (ParseFailureKind.CORRUPTED, ("corrupt",)),
    (ParseFailureKind.WORD_FORMAT, ("docx", "word")),
    (ParseFailureKind.PDF_FORMAT, ("pdf",)),
)


def classify_parse_error(message: str) -> ParseFailureKind:
    lowered = (message or "").lower()
    for kind, needles in _CLASSIFICATION_RULES:
        if any(needle in lowered for needle in needles):
            return kind
    return ParseFailureKind.GENERIC


class ExtractionFailure(ExtractionError):
    status_code = 500

    def __init__(self, kind: ParseFailureKind, *, details: str | None = None):
        super().__init__(PARSE_FAILURE_MESSAGES[kind], details=details)
        self.kind = kind

    @classmethod
    def from_exception(cls, exc: Exception) -> "ExtractionFailure":
        raw = str(exc) or exc.__class__.__name__
        return cls(classify_parse_error(raw), details=raw)
