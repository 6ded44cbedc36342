import asyncio

import pytest

from servicebill.llms.base import BaseLLM
from servicebill.llms.errors import ProviderHttpError, ProviderResponseError
from servicebill.llms.types import ModelConfig, Provider


class FakeLLM(BaseLLM):
    """Adapter double: answers from a per-model script and records every call."""

    def __init__(self, label: str, script: dict[str, object] | None = None) -> None:
        super().__init__(http_client=None)
        self.label = label
        self.script = script or {}
        self.calls: list[dict] = []
        self.closed = False

    async def generate(self, model, credential, prompt, max_tokens, temperature):
        self.calls.append(
            {
                "model": model,
                "credential": credential,
                "prompt": prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        outcome = self.script.get(model, "ok")
        if isinstance(outcome, int):
            raise ProviderHttpError(self.label, outcome, "Too Many Requests" if outcome == 429 else "Error")
        if outcome is None:
            raise ProviderResponseError(self.label)
        return outcome

    async def close(self) -> None:
        self.closed = True


def cfg(provider: str, model: str, credential: str = "key") -> ModelConfig:
    return ModelConfig(provider=Provider(provider), model=model, credential=credential)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def fakes():
    return {
        Provider.GEMINI: FakeLLM("Gemini"),
        Provider.OPENAI: FakeLLM("OpenAI"),
        Provider.OPENROUTER: FakeLLM("OpenRouter"),
        Provider.GROK: FakeLLM("Grok"),
    }
