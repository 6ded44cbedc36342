from abc import ABC, abstractmethod

import httpx

from servicebill.core.config import get_settings
from servicebill.llms.errors import ProviderHttpError, ProviderRequestError, ProviderUnreachableError


class BaseLLM(ABC):
    label: str = ""

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=get_settings().request_timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _post(self, url: str, headers: dict[str, str], payload: dict) -> httpx.Response:
        client = await self._get_client()
        try:
            r = await client.post(url, headers=headers, json=payload)
        except httpx.InvalidURL as e:
            raise ProviderRequestError(self.label, f"invalid URL ({e!s})") from e
        except UnicodeEncodeError as e:
            # httpx encodes header values as ASCII; don't echo the value, it may be a key
            raise ProviderRequestError(self.label, "non-ASCII character in a request header") from e
        except httpx.RequestError as e:
            raise ProviderUnreachableError(self.label, f"{e!s}" or type(e).__name__) from e
        if not r.is_success:
            raise ProviderHttpError(self.label, r.status_code, r.reason_phrase)
        return r

    @abstractmethod
    async def generate(
        self,
        model: str,
        credential: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Send one completion request and return the generated text."""
