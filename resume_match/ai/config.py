from dataclasses import dataclass

from resume_match.core.config import Settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str | None
    base_url: str | None
    timeout_s: float


@dataclass(frozen=True)
class SimilarityConfig:
    url: str
    api_key: str | None
    timeout_s: float


def load_ai_config(settings: Settings) -> AIConfig:
    if settings.ai_provider == "openai":
        return AIConfig(
            provider="openai",
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout_s=settings.ai_timeout_s,
        )
    return AIConfig(
        provider=settings.ai_provider,
        model=settings.gemini_model,
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        timeout_s=settings.ai_timeout_s,
    )


def load_similarity_config(settings: Settings) -> SimilarityConfig:
    return SimilarityConfig(
        url=settings.hf_similarity_url,
        api_key=settings.hf_api_key,
        timeout_s=settings.hf_timeout_s,
    )
