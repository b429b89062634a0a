from __future__ import annotations

import math
from typing import Any, Optional, Sequence

import httpx

from resume_match.ai.errors import UpstreamServiceError, from_http_status


class HuggingFaceSimilarityProvider:
    """Sentence-similarity scores from the Hugging Face inference API."""

    name = "Hugging Face API"

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._url = url
        self._api_key = (api_key or "").strip()
        self._timeout_s = timeout_s
        self._transport = transport

    async def similarity(self, source: str, candidates: Sequence[str]) -> list[float]:
        if not self._api_key:
            raise UpstreamServiceError(self.name, "HF_API_KEY is missing")

        payload = {"inputs": {"source_sentence": source, "sentences": list(candidates)}}
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout_s, transport=self._transport) as client:
                response = await client.post(self._url, json=payload, headers=headers)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as exc:
            raise from_http_status(self.name, exc) from exc
        except httpx.HTTPError as exc:
            raise UpstreamServiceError(self.name, str(exc) or exc.__class__.__name__) from exc
        except ValueError as exc:
            raise UpstreamServiceError(self.name, "response was not valid JSON") from exc

        return _parse_scores(body)


def _parse_scores(body: Any) -> list[float]:
    if not isinstance(body, list) or not body:
        raise UpstreamServiceError(HuggingFaceSimilarityProvider.name, "unexpected similarity response shape")
    scores: list[float] = []
    for value in body:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise UpstreamServiceError(HuggingFaceSimilarityProvider.name, f"invalid similarity value: {value!r}")
        scores.append(float(value))
    return scores
