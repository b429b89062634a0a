from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def discard(path: Path | None) -> None:
    """Delete a temporary upload file; an already-deleted file is a no-op."""
    if path is None:
        return
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("upload_discard_failed path=%s: %s", path, exc)
