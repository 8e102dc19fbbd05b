"""Language model selection for the answering and judging steps."""

from pydantic import BaseModel, Field


class ModelsConfig(BaseModel, frozen=True):
    """Every answering model is paired with every judge model."""

    answering: list[str] = Field(min_length=1)
    judge: list[str] = Field(min_length=1)
    temperature: float = Field(default=0.0, ge=0.0)
