# =============================================================================
# servicebill/llms/router.py — Sequential fallback across the model chain
# =============================================================================
# Entries are tried strictly in order, one at a time, each at most once per
# call. Unconfigured entries are recorded and skipped without a network call.
# Per-attempt failures are logged and recorded; only exhaustion is raised.
# =============================================================================

import time
from typing import Any, Mapping, Sequence

from servicebill.core.config import get_settings
from servicebill.llms.base import BaseLLM
from servicebill.llms.errors import (
    CREDENTIAL_NOT_CONFIGURED,
    AllProvidersExhaustedError,
    LLMError,
)
from servicebill.llms.gemini_client import GeminiClient
from servicebill.llms.grok_client import GrokClient
from servicebill.llms.openai_client import OpenAIClient
from servicebill.llms.openrouter_client import OpenRouterClient
from servicebill.llms.types import (
    AttemptError,
    AvailabilityResult,
    FallbackResponse,
    ModelConfig,
    Provider,
)
from servicebill.utils.logger import logger

PROBE_PROMPT = "ping"
PROBE_MAX_TOKENS = 16
PROBE_TEMPERATURE = 0.0


def get_client(provider: Provider) -> BaseLLM:
    if provider == Provider.GEMINI:
        return GeminiClient()
    if provider == Provider.OPENAI:
        return OpenAIClient()
    if provider == Provider.OPENROUTER:
        return OpenRouterClient()
    if provider == Provider.GROK:
        return GrokClient()
    raise ValueError(f"Unknown provider: {provider}")


class FallbackRouter:
    def __init__(
        self,
        configs: Sequence[ModelConfig],
        clients: Mapping[Provider, BaseLLM] | None = None,
    ) -> None:
        self._configs = tuple(configs)
        self._clients: dict[Provider, BaseLLM] = dict(clients or {})

    @property
    def configs(self) -> tuple[ModelConfig, ...]:
        return self._configs

    def _client_for(self, provider: Provider) -> BaseLLM:
        if provider not in self._clients:
            self._clients[provider] = get_client(provider)
        return self._clients[provider]

    async def _invoke(
        self,
        config: ModelConfig,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        client = self._client_for(config.provider)
        return await client.generate(config.model, config.credential, prompt, max_tokens, temperature)

    def list_available(self) -> list[ModelConfig]:
        return [c for c in self._configs if c.configured]

    async def call_with_fallback(
        self,
        prompt: str,
        schema_hint: Any = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> FallbackResponse:
        """Return the first successful completion in chain order.

        ``schema_hint`` is accepted for callers that describe the expected JSON
        shape; it is not forwarded to providers. Callers extract JSON from
        ``content`` themselves.

        Raises:
            AllProvidersExhaustedError: no entry succeeded; carries every attempt.
        """
        settings = get_settings()
        effective_max_tokens = max_tokens if max_tokens is not None else settings.max_tokens
        effective_temperature = temperature if temperature is not None else settings.temperature
        attempts: list[AttemptError] = []

        for config in self._configs:
            if not config.configured:
                attempts.append(AttemptError(config=config, error=CREDENTIAL_NOT_CONFIGURED))
                continue

            start = time.perf_counter()
            try:
                content = await self._invoke(
                    config, prompt, effective_max_tokens, effective_temperature
                )
            except LLMError as e:
                attempts.append(AttemptError(config=config, error=str(e)))
                logger.warning(
                    "provider_failed",
                    extra={"provider": config.provider.value, "model": config.model, "error": str(e)},
                )
                continue

            latency_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "llm_used",
                extra={
                    "provider": config.provider.value,
                    "model": config.model,
                    "attempt": len(attempts) + 1,
                    "latency_ms": round(latency_ms, 2),
                },
            )
            return FallbackResponse(
                content=content,
                provider=config.provider.value,
                model=config.model,
                success=True,
            )

        error = AllProvidersExhaustedError(attempts)
        logger.error("all_providers_failed", extra={"attempts": len(attempts)})
        raise error

    async def check_availability(self) -> list[AvailabilityResult]:
        """Probe every configured entry with a tiny prompt. Does not stop at the first success."""
        results: list[AvailabilityResult] = []
        for config in self._configs:
            if not config.configured:
                results.append(
                    AvailabilityResult(config=config, available=False, error=CREDENTIAL_NOT_CONFIGURED)
                )
                continue
            try:
                await self._invoke(config, PROBE_PROMPT, PROBE_MAX_TOKENS, PROBE_TEMPERATURE)
            except LLMError as e:
                results.append(AvailabilityResult(config=config, available=False, error=str(e)))
                continue
            results.append(AvailabilityResult(config=config, available=True))
        return results

    async def close(self) -> None:
        for client in self._clients.values():
            await client.close()
