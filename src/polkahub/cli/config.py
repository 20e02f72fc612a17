"""Configuration helpers for the polkahub CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from polkahub import toml_io
from polkahub.client import DEFAULT_REGISTRY_BASE
from polkahub.errors import ConfigError
from polkahub.token_store import default_config_path

REGISTRY_BASE_ENV_VAR = "POLKAHUB_API_URL"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CLIConfig:
    config_path: Path
    registry_base: str = DEFAULT_REGISTRY_BASE


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        return toml_io.read(path)
    except toml_io.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc


def load_cli_config(path: str | Path | None = None) -> CLIConfig:
    config_path = Path(path) if path else default_config_path()
    source: dict[str, Any] = {}
    if config_path.exists():
        try:
            source = _load_toml(config_path)
        except ConfigError as exc:
            if path:
                raise
            # The default file also holds the token; login must still be able to rewrite it.
            logger.warning("ignoring unreadable config: %s", exc)

    env_registry_base = os.getenv(REGISTRY_BASE_ENV_VAR)
    configured_registry_base = str(source.get("registry_base", DEFAULT_REGISTRY_BASE)).strip()
    registry_base = env_registry_base.strip() if env_registry_base else configured_registry_base
    if not registry_base:
        raise ConfigError("registry_base must not be empty")
    if not registry_base.startswith(("http://", "https://")):
        raise ConfigError("registry_base must be an http(s) URL")

    return CLIConfig(config_path=config_path, registry_base=registry_base)


__all__ = ["CLIConfig", "REGISTRY_BASE_ENV_VAR", "load_cli_config"]
