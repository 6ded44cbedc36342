import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel

from servicebill.llms.types import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE

load_dotenv()


class Settings(BaseModel):
    gemini_api_key: str = ""
    gemini_api_key_secondary: str = ""
    openai_api_key: str = ""
    openrouter_api_key: str = ""
    grok_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    openai_base_url: str = "https://api.openai.com/v1"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    grok_base_url: str = "https://api.x.ai/v1"
    app_url: str = "http://localhost:3000"
    app_title: str = "servicebill"
    request_timeout: float = 30.0
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    fallback_chain_file: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_api_key_secondary=os.getenv("GEMINI_API_KEY_SECONDARY", ""),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            grok_api_key=os.getenv("GROK_API_KEY", ""),
            gemini_base_url=os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
            openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
            openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
            grok_base_url=os.getenv("GROK_BASE_URL", "https://api.x.ai/v1"),
            app_url=os.getenv("APP_URL", "http://localhost:3000"),
            app_title=os.getenv("APP_TITLE", "servicebill"),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            max_tokens=int(os.getenv("LLM_MAX_TOKENS", str(DEFAULT_MAX_TOKENS))),
            temperature=float(os.getenv("LLM_TEMPERATURE", str(DEFAULT_TEMPERATURE))),
            fallback_chain_file=os.getenv("FALLBACK_CHAIN_FILE", ""),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def credential_for(self, env_name: str) -> str:
        """Resolve an api_key_env name from the chain to its credential ('' when unset)."""
        field = env_name.strip().lower()
        if "api_key" in field and field in type(self).model_fields:
            return (getattr(self, field) or "").strip()
        return os.getenv(env_name, "").strip()


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
