from typing import Any

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    max_tokens: int | None = Field(None, gt=0)
    temperature: float | None = Field(None, ge=0.0, le=2.0)


class ParseRequest(BaseModel):
    text: str = Field(..., min_length=1)


class ModifyRequest(BaseModel):
    document: dict[str, Any]
    instruction: str = Field(..., min_length=1)
