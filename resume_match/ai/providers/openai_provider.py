from __future__ import annotations

from typing import Optional

from openai import APIError, APIStatusError, AsyncOpenAI

from resume_match.ai.errors import UpstreamServiceError


class OpenAIProvider:
    name = "OpenAI API"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        temperature: float = 0.2,
    ):
        self._model = model
        self._temperature = temperature
        key = (api_key or "").strip()
        # A single attempt per request; the caller falls back locally on failure.
        self._client = (
            AsyncOpenAI(api_key=key, base_url=base_url or None, timeout=timeout_s, max_retries=0)
            if key
            else None
        )

    async def complete(self, prompt: str) -> str:
        if self._client is None:
            raise UpstreamServiceError(self.name, "OPENAI_API_KEY is missing")

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._temperature,
            )
        except APIStatusError as exc:
            raise UpstreamServiceError(self.name, exc.message, status_code=exc.status_code) from exc
        except APIError as exc:
            raise UpstreamServiceError(self.name, exc.message) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamServiceError(self.name, "empty completion")
        return content
