from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_HF_SIMILARITY_URL = (
    "https://router.huggingface.co/hf-inference/models/"
    "sentence-transformers/all-MiniLM-L6-v2/pipeline/sentence-similarity"
)


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


def _normalize_extension(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


@dataclass(frozen=True)
class ExtractorConfig:
    max_upload_bytes: int = 10 * 1024 * 1024
    allowed_extensions: frozenset[str] = frozenset({".pdf", ".doc", ".docx", ".txt"})
    min_text_chars: int = 10


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    max_upload_bytes: int
    allowed_extensions: tuple[str, ...]
    min_text_chars: int
    hf_api_key: str | None
    hf_similarity_url: str
    hf_timeout_s: float
    ai_provider: str
    ai_timeout_s: float
    gemini_api_key: str | None
    gemini_model: str
    gemini_base_url: str
    openai_api_key: str | None
    openai_model: str
    openai_base_url: str | None

    def extractor_config(self) -> ExtractorConfig:
        return ExtractorConfig(
            max_upload_bytes=self.max_upload_bytes,
            allowed_extensions=frozenset(_normalize_extension(ext) for ext in self.allowed_extensions),
            min_text_chars=self.min_text_chars,
        )


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ],
    ),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    allowed_extensions=_get_env_list("ALLOWED_EXTENSIONS", [".pdf", ".doc", ".docx", ".txt"]),
    min_text_chars=_get_env_int("MIN_TEXT_CHARS", 10),
    hf_api_key=_get_env("HF_API_KEY"),
    hf_similarity_url=_get_env("HF_SIMILARITY_URL", DEFAULT_HF_SIMILARITY_URL) or DEFAULT_HF_SIMILARITY_URL,
    hf_timeout_s=_get_env_float("HF_TIMEOUT_S", 30.0),
    ai_provider=(_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower(),
    ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 30.0),
    gemini_api_key=_get_env("GEMINI_API_KEY"),
    gemini_model=_get_env("GEMINI_MODEL", "gemini-1.5-flash") or "gemini-1.5-flash",
    gemini_base_url=(
        _get_env("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
        or "https://generativelanguage.googleapis.com/v1beta"
    ),
    openai_api_key=_get_env("OPENAI_API_KEY"),
    openai_model=_get_env("OPENAI_MODEL", "gpt-4o-mini") or "gpt-4o-mini",
    openai_base_url=_get_env("OPENAI_BASE_URL"),
)

if settings.ai_provider not in {"gemini", "openai"}:
    raise RuntimeError("AI_PROVIDER must be either 'gemini' or 'openai'.")
