from __future__ import annotations

from typing import Any, Optional

import httpx

from resume_match.ai.errors import UpstreamServiceError, from_http_status


class GeminiProvider:
    name = "Gemini API"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._model = model
        self._api_key = (api_key or "").strip()
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._transport = transport

    async def complete(self, prompt: str) -> str:
        if not self._api_key:
            raise UpstreamServiceError(self.name, "GEMINI_API_KEY is missing")

        url = f"{self._base_url}/models/{self._model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"Content-Type": "application/json", "x-goog-api-key": self._api_key}
        try:
            async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as exc:
            raise from_http_status(self.name, exc) from exc
        except httpx.HTTPError as exc:
            raise UpstreamServiceError(self.name, str(exc) or exc.__class__.__name__) from exc
        except ValueError as exc:
            raise UpstreamServiceError(self.name, "response was not valid JSON") from exc

        return _first_candidate_text(body)


def _first_candidate_text(body: Any) -> str:
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise UpstreamServiceError(GeminiProvider.name, "response did not contain any candidate text") from exc
    if not isinstance(text, str):
        raise UpstreamServiceError(GeminiProvider.name, "candidate text was not a string")
    return text
