from resume_match.ai.config import AIConfig, SimilarityConfig
from resume_match.ai.types import SimilarityScorer, TextGenerator

from resume_match.ai.providers.gemini_provider import GeminiProvider
from resume_match.ai.providers.huggingface_provider import HuggingFaceSimilarityProvider
from resume_match.ai.providers.openai_provider import OpenAIProvider


def get_text_generator(cfg: AIConfig) -> TextGenerator:
    if cfg.provider == "gemini":
        return GeminiProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url or "https://generativelanguage.googleapis.com/v1beta",
            timeout_s=cfg.timeout_s,
        )

    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")


def get_similarity_scorer(cfg: SimilarityConfig) -> SimilarityScorer:
    return HuggingFaceSimilarityProvider(url=cfg.url, api_key=cfg.api_key, timeout_s=cfg.timeout_s)
