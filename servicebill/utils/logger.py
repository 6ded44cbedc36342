# =============================================================================
# servicebill/utils/logger.py — Shared logger with key=value extras
# =============================================================================
# Messages are event names ("llm_used", "provider_failed"); details travel in
# `extra=` and are appended to the line as key=value pairs.
# =============================================================================

import logging

from servicebill.core.config import get_settings

LOGGER_NAME = "servicebill"

# Attributes present on every LogRecord; anything else came from `extra=`.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if not extras:
            return base
        pairs = " ".join(f"{k}={v}" for k, v in extras.items())
        return f"{base} {pairs}"


def setup_logger(level: str | None = None) -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel((level or get_settings().log_level).upper())
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(KeyValueFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        log.addHandler(handler)
    return log


logger = setup_logger()
