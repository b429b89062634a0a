from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ExtractionResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str
    file_type: str
    file_name: str
    text_length: int = Field(ge=0)


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
