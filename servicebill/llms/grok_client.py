import httpx

from servicebill.core.config import get_settings
from servicebill.llms.openai_client import OpenAICompatibleClient


class GrokClient(OpenAICompatibleClient):
    label = "Grok"

    def __init__(self, http_client: httpx.AsyncClient | None = None, base_url: str | None = None) -> None:
        super().__init__(base_url or get_settings().grok_base_url, http_client)
