from __future__ import annotations

from typing import Any

import httpx


class UpstreamServiceError(RuntimeError):
    def __init__(self, service: str, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.service = service
        self.message = message
        self.status_code = status_code


def _message_from_body(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, str) and error.strip():
        return error.strip()
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


def from_http_status(service: str, exc: httpx.HTTPStatusError) -> UpstreamServiceError:
    response = exc.response
    try:
        message = _message_from_body(response.json())
    except ValueError:
        message = None
    if not message:
        message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
    return UpstreamServiceError(service, message, status_code=response.status_code)


def describe_failure(exc: BaseException) -> str:
    if isinstance(exc, UpstreamServiceError):
        return exc.message
    return str(exc) or exc.__class__.__name__


def is_auth_failure(exc: BaseException) -> bool:
    if isinstance(exc, UpstreamServiceError):
        return exc.status_code == 401
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code == 401
    return False
