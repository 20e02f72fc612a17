"""Polkahub client error types."""

from __future__ import annotations

from dataclasses import dataclass

INPUT_ERROR_STATUS = "input error"
MISSING_TOKEN_REASON = "invalid token, please register and authenticate first"


@dataclass(frozen=True)
class Failure:
    """Universal failure shape: a status label plus a human-readable reason."""

    status: str
    reason: str

    def as_dict(self) -> dict:
        return {"status": self.status, "reason": self.reason}


class PolkahubError(RuntimeError):
    """Base client error."""


class InputValidationError(PolkahubError):
    """User-supplied input was rejected before any request was sent."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    @property
    def failure(self) -> Failure:
        return Failure(status=INPUT_ERROR_STATUS, reason=self.reason)


class AuthenticationMissingError(PolkahubError):
    """No usable bearer token for an endpoint that requires one."""

    def __init__(self, detail: str | None = None) -> None:
        message = f"{detail}. {MISSING_TOKEN_REASON}" if detail else MISSING_TOKEN_REASON
        super().__init__(message)


class RegistryUnavailableError(PolkahubError):
    """Registry could not be reached."""


class TokenStoreError(PolkahubError):
    """Token could not be persisted."""


class ResponseContractError(PolkahubError):
    """A decoded response does not belong to the action that produced it."""


class ConfigError(ValueError):
    """Raised when CLI config is invalid or the config home cannot be resolved."""
