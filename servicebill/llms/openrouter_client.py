import httpx

from servicebill.core.config import get_settings
from servicebill.llms.openai_client import OpenAICompatibleClient


class OpenRouterClient(OpenAICompatibleClient):
    label = "OpenRouter"

    def __init__(self, http_client: httpx.AsyncClient | None = None, base_url: str | None = None) -> None:
        s = get_settings()
        super().__init__(base_url or s.openrouter_base_url, http_client)
        self._referer = s.app_url
        self._title = s.app_title

    def _headers(self, credential: str) -> dict[str, str]:
        # OpenRouter attributes traffic to the calling app via these two headers
        headers = super()._headers(credential)
        headers["HTTP-Referer"] = self._referer
        headers["X-Title"] = self._title
        return headers
