from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class UploadedDocument:
    storage_path: Path | None
    file_name: str | None
    extension: str
    size_bytes: int


class UploadRejectionKind(str, Enum):
    NO_FILE = "no_file"
    INVALID_UPLOAD = "invalid_upload"
    SIZE_LIMIT = "size_limit"


@dataclass(frozen=True)
class UploadAccepted:
    document: UploadedDocument


@dataclass(frozen=True)
class UploadRejected:
    kind: UploadRejectionKind
    message: str = ""


UploadOutcome = Union[UploadAccepted, UploadRejected]
