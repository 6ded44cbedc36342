# =============================================================================
# servicebill/llms/gemini_client.py — Google Gemini generateContent adapter
# =============================================================================
# Key goes in the x-goog-api-key header, never the query string.
# One POST per call; the router moves on to the next chain entry on failure.
# =============================================================================

import httpx

from servicebill.core.config import get_settings
from servicebill.llms.base import BaseLLM
from servicebill.llms.errors import ProviderResponseError


class GeminiClient(BaseLLM):
    label = "Gemini"

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        super().__init__(http_client)
        self._base_url = (base_url or get_settings().gemini_base_url).rstrip("/")

    async def generate(
        self,
        model: str,
        credential: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        r = await self._post(
            f"{self._base_url}/models/{model}:generateContent",
            headers={"x-goog-api-key": credential},
            payload={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": temperature,
                    "maxOutputTokens": max_tokens,
                },
            },
        )
        try:
            data = r.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderResponseError(self.label) from e
        if not isinstance(text, str) or not text:
            raise ProviderResponseError(self.label)
        return text
