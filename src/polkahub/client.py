"""HTTP transport for registry endpoints."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass, field

import requests

from polkahub.errors import AuthenticationMissingError, RegistryUnavailableError
from polkahub.requests import AuthMode, RequestSpec
from polkahub.token_store import TokenStore

DEFAULT_REGISTRY_BASE = "https://api.polkahub.org"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    text: str
    status_code: int
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _no_progress(description: str) -> AbstractContextManager:  # noqa: ARG001
    return nullcontext()


@dataclass
class HubClient:
    base_url: str = DEFAULT_REGISTRY_BASE
    token_store: TokenStore | None = None
    timeout: float | None = None
    progress: Callable[[str], AbstractContextManager] = _no_progress
    _session: requests.Session = field(default_factory=requests.Session, init=False, repr=False)

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _auth_headers(self, auth: AuthMode) -> dict[str, str] | None:
        if auth is AuthMode.NONE:
            return None
        if self.token_store is None:
            raise AuthenticationMissingError("no token store configured")
        token = self.token_store.load_token()
        if not token.isprintable() or any(ch.isspace() for ch in token):
            raise AuthenticationMissingError("stored token is malformed")
        try:
            token.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise AuthenticationMissingError("stored token is malformed") from exc
        return {"Authorization": f"Bearer {token}"}

    def post(self, path: str, body: dict, *, auth: AuthMode = AuthMode.NONE, description: str = "") -> RawResponse:
        headers = self._auth_headers(auth)
        url = self._url(path)
        logger.debug("POST %s (auth=%s)", url, auth.value)
        with self.progress(description):
            try:
                response = self._session.request(
                    "POST",
                    url,
                    json=body,
                    headers=headers,
                    timeout=self.timeout,
                )
            except requests.RequestException as exc:
                raise RegistryUnavailableError(str(exc)) from exc
        logger.debug("POST %s -> %s", url, response.status_code)
        return RawResponse(
            text=response.text,
            status_code=response.status_code,
            reason=response.reason or "",
        )

    def send(self, spec: RequestSpec) -> RawResponse:
        return self.post(spec.path, spec.body, auth=spec.auth, description=spec.description)


__all__ = ["DEFAULT_REGISTRY_BASE", "HubClient", "RawResponse"]
