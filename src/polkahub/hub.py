"""Hub manifest (``Hub.toml``) reader.

The manifest is optional project metadata.  A missing, unreadable or malformed
file yields ``None`` so callers fall back to the values given on the command line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from polkahub import toml_io

HUB_FILE_NAME = "Hub.toml"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HubDescriptor:
    name: str
    version: str
    description: str | None = None


def resolve_hub_path(location: str | Path | None = None, *, cwd: Path | None = None) -> Path:
    """Return the manifest path for a directory or explicit file location.

    ``None`` means the current directory.  A directory gets ``Hub.toml`` joined
    onto it; any other path is taken as the manifest file itself.
    """
    base = cwd if cwd is not None else Path.cwd()
    if location is None or str(location).strip() == "":
        return base / HUB_FILE_NAME
    candidate = Path(location).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    if candidate.is_dir():
        return candidate / HUB_FILE_NAME
    return candidate


def parse_hub(raw: str) -> HubDescriptor | None:
    try:
        parsed = toml_io.loads(raw)
    except toml_io.TOMLDecodeError as exc:
        logger.debug("ignoring malformed hub manifest: %s", exc)
        return None

    section = parsed.get("parachain")
    if not isinstance(section, dict):
        return None
    name = section.get("name")
    version = section.get("version")
    if not isinstance(name, str) or not isinstance(version, str):
        return None
    if not name.strip() or not version.strip():
        return None
    description = section.get("description")
    return HubDescriptor(
        name=name.strip(),
        version=version.strip(),
        description=description if isinstance(description, str) else None,
    )


def read_hub_file(location: str | Path | None = None, *, cwd: Path | None = None) -> HubDescriptor | None:
    path = resolve_hub_path(location, cwd=cwd)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("no readable hub manifest at %s", path)
        return None
    return parse_hub(raw)


__all__ = ["HUB_FILE_NAME", "HubDescriptor", "parse_hub", "read_hub_file", "resolve_hub_path"]
