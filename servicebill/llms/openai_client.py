import httpx

from servicebill.core.config import get_settings
from servicebill.llms.base import BaseLLM
from servicebill.llms.errors import ProviderResponseError


class OpenAICompatibleClient(BaseLLM):
    """Chat-completions adapter shared by OpenAI, OpenRouter and Grok."""

    label = "OpenAI"

    def __init__(self, base_url: str, http_client: httpx.AsyncClient | None = None) -> None:
        super().__init__(http_client)
        self._base_url = base_url.rstrip("/")

    def _headers(self, credential: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {credential}"}

    async def generate(
        self,
        model: str,
        credential: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        r = await self._post(
            f"{self._base_url}/chat/completions",
            headers=self._headers(credential),
            payload={
                "model": model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": temperature,
                "max_tokens": max_tokens,
            },
        )
        try:
            data = r.json()
            text = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderResponseError(self.label) from e
        if not isinstance(text, str) or not text:
            raise ProviderResponseError(self.label)
        return text


class OpenAIClient(OpenAICompatibleClient):
    def __init__(self, http_client: httpx.AsyncClient | None = None, base_url: str | None = None) -> None:
        super().__init__(base_url or get_settings().openai_base_url, http_client)
