"""TOML read/write helpers shared by the config, token store and hub reader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

TOMLDecodeError = tomllib.TOMLDecodeError


def loads(raw: str) -> dict[str, Any]:
    return tomllib.loads(raw)


def read(path: Path) -> dict[str, Any]:
    return loads(path.read_text(encoding="utf-8"))


def _chmod_owner_only(path: Path) -> None:
    if os.name != "posix":
        return
    path.chmod(0o600)


def write(path: Path, data: dict[str, Any], *, private: bool = False) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(data), encoding="utf-8")
    if private:
        _chmod_owner_only(path)
    return path
