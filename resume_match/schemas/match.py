from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Priority = Literal["Low", "Medium", "High"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MatchRequest(BaseModel):
    resume: str = Field(min_length=1)
    job_description: str = Field(min_length=1, alias="jobDesc")

    model_config = ConfigDict(populate_by_name=True)


class Analysis(_CamelModel):
    overall: str
    suggestions: str
    action_items: str


class Metrics(_CamelModel):
    resume_word_count: int = Field(ge=0)
    job_description_word_count: int = Field(ge=0)
    keyword_density: int = Field(ge=0, le=100)
    similarity_score: int = Field(ge=0, le=100)


class Recommendations(_CamelModel):
    priority: Priority
    estimated_improvement: int = Field(ge=0, le=100)
    focus_areas: list[str] = Field(default_factory=list, max_length=5)


class MatchResult(_CamelModel):
    score: int = Field(ge=0, le=100)
    analysis: Analysis
    missing_keywords: list[str] = Field(default_factory=list)
    metrics: Metrics
    recommendations: Recommendations
    warnings: list[str] = Field(default_factory=list)


class FallbackPayload(_CamelModel):
    score: int = Field(ge=30, lt=70)
    suggestions: str
    missing_keywords: list[str] = Field(default_factory=list)
