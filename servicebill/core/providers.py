# =============================================================================
# servicebill/core/providers.py — Fallback chain as operator-supplied data
# =============================================================================
# Order is preference: free / cheap models first, paid and most reliable last.
# Override with FALLBACK_CHAIN_FILE pointing at a JSON list of
#   {"provider": "...", "model": "...", "api_key_env": "..."}
# =============================================================================

import json
from pathlib import Path
from typing import Any, Sequence

from servicebill.core.config import Settings, get_settings
from servicebill.llms.types import ModelConfig, Provider


class ChainConfigError(ValueError):
    """Raised when a fallback chain entry cannot be turned into a ModelConfig."""


DEFAULT_CHAIN: list[dict[str, str]] = [
    {"provider": "gemini", "model": "gemini-2.5-flash", "api_key_env": "GEMINI_API_KEY"},
    {"provider": "openrouter", "model": "deepseek/deepseek-r1:free", "api_key_env": "OPENROUTER_API_KEY"},
    {"provider": "openrouter", "model": "deepseek/deepseek-r1-distill-qwen-32b:free", "api_key_env": "OPENROUTER_API_KEY"},
    {"provider": "openrouter", "model": "meta-llama/llama-4-maverick:free", "api_key_env": "OPENROUTER_API_KEY"},
    {"provider": "gemini", "model": "gemini-2.0-flash", "api_key_env": "GEMINI_API_KEY"},
    {"provider": "gemini", "model": "gemini-1.5-pro", "api_key_env": "GEMINI_API_KEY"},
    {"provider": "gemini", "model": "gemini-1.5-pro", "api_key_env": "GEMINI_API_KEY_SECONDARY"},
    {"provider": "gemini", "model": "gemini-2.5-pro", "api_key_env": "GEMINI_API_KEY"},
    {"provider": "openai", "model": "gpt-4-turbo", "api_key_env": "OPENAI_API_KEY"},
    {"provider": "openrouter", "model": "openai/gpt-4-turbo", "api_key_env": "OPENROUTER_API_KEY"},
    {"provider": "openrouter", "model": "meta-llama/llama-3.3-70b-instruct", "api_key_env": "OPENROUTER_API_KEY"},
    {"provider": "grok", "model": "grok-2", "api_key_env": "GROK_API_KEY"},
]

DEFAULT_KEY_ENV = {
    Provider.GEMINI: "GEMINI_API_KEY",
    Provider.OPENAI: "OPENAI_API_KEY",
    Provider.OPENROUTER: "OPENROUTER_API_KEY",
    Provider.GROK: "GROK_API_KEY",
}


def load_chain(path: str | Path) -> list[dict[str, Any]]:
    resolved = Path(path).expanduser()
    if not resolved.exists():
        raise ChainConfigError(f"Fallback chain file does not exist: {resolved}")
    try:
        loaded = json.loads(resolved.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ChainConfigError(f"Fallback chain file is not valid JSON: {resolved}") from exc
    if not isinstance(loaded, list):
        raise ChainConfigError("Fallback chain must be a JSON list.")
    return loaded


def build_model_configs(
    chain: Sequence[dict[str, Any]] | None = None,
    settings: Settings | None = None,
) -> tuple[ModelConfig, ...]:
    """Resolve chain entries against the environment. Missing keys leave the entry unconfigured."""
    s = settings or get_settings()
    if chain is None:
        chain = load_chain(s.fallback_chain_file) if s.fallback_chain_file else DEFAULT_CHAIN
    configs: list[ModelConfig] = []
    for i, entry in enumerate(chain):
        if not isinstance(entry, dict):
            raise ChainConfigError(f"Chain entry {i} must be an object.")
        try:
            provider = Provider(str(entry.get("provider", "")).strip().lower())
        except ValueError as exc:
            raise ChainConfigError(
                f"Chain entry {i}: unknown provider {entry.get('provider')!r}"
            ) from exc
        model = str(entry.get("model") or "").strip()
        if not model:
            raise ChainConfigError(f"Chain entry {i}: 'model' must be a non-empty string.")
        key_env = str(entry.get("api_key_env") or DEFAULT_KEY_ENV[provider])
        configs.append(
            ModelConfig(provider=provider, model=model, credential=s.credential_for(key_env))
        )
    return tuple(configs)
