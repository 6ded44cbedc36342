from typing import Sequence

from servicebill.llms.types import AttemptError

# Recorded against a chain entry with no credential; never raised.
CREDENTIAL_NOT_CONFIGURED = "credential not configured"


class LLMError(Exception):
    """Base error for a single provider attempt."""


class ProviderHttpError(LLMError):
    def __init__(
        self,
        label: str,
        status_code: int | None,
        reason: str,
        message: str | None = None,
    ) -> None:
        self.label = label
        self.status_code = status_code
        self.reason = reason
        super().__init__(message or f"{label} API error: {status_code} {reason}".rstrip())


class ProviderUnreachableError(ProviderHttpError):
    def __init__(self, label: str, detail: str) -> None:
        super().__init__(label, None, detail, message=f"{label} API unreachable: {detail}")


class ProviderRequestError(LLMError):
    """The request could not be built (bad URL, non-ASCII header value)."""

    def __init__(self, label: str, detail: str) -> None:
        self.label = label
        super().__init__(f"{label} request could not be sent: {detail}")


class ProviderResponseError(LLMError):
    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Invalid response from {label} API")


class AllProvidersExhaustedError(Exception):
    """Every entry of the chain failed or was skipped."""

    def __init__(self, attempts: Sequence[AttemptError]) -> None:
        self.attempts = list(attempts)
        self.summary = "\n".join(a.line() for a in self.attempts)
        super().__init__(
            "All AI models failed. Please check your API keys, quotas, or network:\n"
            f"{self.summary}"
        )
