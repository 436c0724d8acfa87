from typing import Any

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    text: str
    line: int = Field(ge=0)
    options: dict[str, Any] = Field(default_factory=dict)


class CompleteRequest(BaseModel):
    text: str
    offset: int = Field(ge=0)


class ReflowRequest(BaseModel):
    text: str
    width: int | None = Field(default=None, ge=10)
