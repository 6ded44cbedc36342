from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_TOKENS = 1024
DEFAULT_TEMPERATURE = 0.7


class Provider(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GROK = "grok"


class ModelConfig(BaseModel):
    """One entry of the fallback chain. The chain order is the preference order."""

    model_config = ConfigDict(frozen=True)

    provider: Provider
    model: str
    credential: str = Field("", repr=False, exclude=True)

    @property
    def configured(self) -> bool:
        return bool(self.credential)

    @property
    def label(self) -> str:
        return f"{self.provider.value}/{self.model}"


class FallbackResponse(BaseModel):
    content: str
    provider: str
    model: str
    success: bool = True


class AttemptError(BaseModel):
    config: ModelConfig
    error: str

    def line(self) -> str:
        return f"{self.config.label}: {self.error}"


class AvailabilityResult(BaseModel):
    config: ModelConfig
    available: bool
    error: str | None = None
