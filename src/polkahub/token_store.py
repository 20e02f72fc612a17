"""Bearer token persistence under the polkahub home directory.

Concurrent CLI invocations are not coordinated: the last login to finish
writes the token that later requests will use.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from polkahub import toml_io
from polkahub.errors import AuthenticationMissingError, ConfigError, TokenStoreError

POLKAHUB_HOME_ENV_VAR = "POLKAHUB_HOME"
CONFIG_FILE_NAME = "config"


def polkahub_home(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    override = (env.get(POLKAHUB_HOME_ENV_VAR) or "").strip()
    if override:
        return Path(override).expanduser()
    home = (env.get("HOME") or "").strip()
    if not home:
        raise ConfigError(
            f"please set environment variable $HOME (or ${POLKAHUB_HOME_ENV_VAR})"
        )
    return Path(home) / ".polkahub"


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    return polkahub_home(environ) / CONFIG_FILE_NAME


@dataclass(frozen=True)
class StoredCredential:
    token: str


@dataclass
class TokenStore:
    path: Path

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> TokenStore:
        return cls(path=default_config_path(environ))

    def load(self) -> StoredCredential:
        try:
            parsed = toml_io.read(self.path)
        except FileNotFoundError as exc:
            raise AuthenticationMissingError(f"no config file at {self.path}") from exc
        except (OSError, UnicodeDecodeError, toml_io.TOMLDecodeError) as exc:
            raise AuthenticationMissingError(f"unreadable config file {self.path}") from exc

        token = parsed.get("token")
        if not isinstance(token, str) or not token.strip():
            raise AuthenticationMissingError(f"no token in {self.path}")
        return StoredCredential(token=token.strip())

    def load_token(self) -> str:
        return self.load().token

    def store_token(self, token: str) -> Path:
        if not token.strip():
            raise TokenStoreError("registry returned an empty token")
        existing: dict = {}
        if self.path.exists():
            try:
                existing = toml_io.read(self.path)
            except (OSError, UnicodeDecodeError, toml_io.TOMLDecodeError):
                existing = {}
        existing["token"] = token
        try:
            return toml_io.write(self.path, existing, private=True)
        except OSError as exc:
            raise TokenStoreError(f"failed to write config file {self.path}: {exc}") from exc


__all__ = [
    "CONFIG_FILE_NAME",
    "POLKAHUB_HOME_ENV_VAR",
    "StoredCredential",
    "TokenStore",
    "default_config_path",
    "polkahub_home",
]
