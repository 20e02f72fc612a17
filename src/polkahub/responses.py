"""Decoding of registry responses into typed results.

Every response is an object tagged by ``status``: ``"ok"`` carries the payload
for the action that was sent, ``"error"`` carries a ``reason``.  Decoding never
raises; anything that does not fit becomes a :class:`Failure`.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Union

from polkahub.actions import Action
from polkahub.errors import Failure

STATUS_OK = "ok"
STATUS_ERROR = "error"
JSON_PARSE_ERROR = "json parse error"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Created:
    repo_url: str
    http_url: str
    ws_url: str
    repository_created: bool

    def as_dict(self) -> dict:
        return {
            "status": STATUS_OK,
            "payload": {
                "repo_url": self.repo_url,
                "http_url": self.http_url,
                "ws_url": self.ws_url,
                "repository_created": self.repository_created,
            },
        }


@dataclass(frozen=True)
class Found:
    versions: tuple[str, ...]

    def as_dict(self) -> dict:
        return {"status": STATUS_OK, "payload": list(self.versions)}


@dataclass(frozen=True)
class Installed:
    http_url: str
    ws_url: str

    def as_dict(self) -> dict:
        return {"status": STATUS_OK, "payload": {"http_url": self.http_url, "ws_url": self.ws_url}}


@dataclass(frozen=True)
class Registered:
    def as_dict(self) -> dict:
        return {"status": STATUS_OK}


@dataclass(frozen=True)
class LoggedIn:
    token: str

    def as_dict(self) -> dict:
        return {"status": STATUS_OK, "token": self.token}


DecodedResponse = Union[Created, Found, Installed, Registered, LoggedIn, Failure]


class ShapeError(ValueError):
    """Response JSON does not have the expected shape."""


def _require_mapping(value: Any, field_name: str) -> dict:
    if not isinstance(value, dict):
        raise ShapeError(f"{field_name} must be an object")
    return value


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ShapeError(f"missing or non-string field: {key}")
    return value


def _require_bool(data: dict, key: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise ShapeError(f"missing or non-boolean field: {key}")
    return value


class ResponseSchema:
    """Decodes the envelope for one action.

    Subclasses implement :meth:`decode_success` for the ``ok`` payload.
    """

    result_type: type = object

    def decode_success(self, data: dict) -> DecodedResponse:
        raise NotImplementedError

    def decode_failure(self, data: dict) -> Failure:
        reason = data.get("reason")
        if not isinstance(reason, str):
            raise ShapeError("error response without a string reason")
        status = data.get("status")
        return Failure(status=status if isinstance(status, str) else STATUS_ERROR, reason=reason)

    def decode(self, data: dict) -> DecodedResponse:
        status = data.get("status")
        if status == STATUS_OK:
            return self.decode_success(data)
        if status == STATUS_ERROR:
            return self.decode_failure(data)
        if isinstance(status, str) and "reason" in data:
            # Untagged failure from older service revisions: pass through verbatim.
            return self.decode_failure(data)
        raise ShapeError(f"unexpected response status: {status!r}")

    def accepts(self, result: DecodedResponse) -> bool:
        return isinstance(result, (self.result_type, Failure))


class CreatedSchema(ResponseSchema):
    result_type = Created

    def decode_success(self, data: dict) -> Created:
        payload = _require_mapping(data.get("payload"), "payload")
        return Created(
            repo_url=_require_str(payload, "repo_url"),
            http_url=_require_str(payload, "http_url"),
            ws_url=_require_str(payload, "ws_url"),
            repository_created=_require_bool(payload, "repository_created"),
        )


class FoundSchema(ResponseSchema):
    result_type = Found

    def decode_success(self, data: dict) -> Found:
        payload = data.get("payload")
        if not isinstance(payload, list):
            raise ShapeError("payload must be a list")
        versions = []
        for entry in payload:
            if isinstance(entry, str):
                versions.append(entry)
            elif isinstance(entry, dict):
                versions.append(_require_str(entry, "version"))
            else:
                raise ShapeError("payload entries must be version strings or objects")
        return Found(versions=tuple(versions))


class InstalledSchema(ResponseSchema):
    result_type = Installed

    def decode_success(self, data: dict) -> Installed:
        payload = _require_mapping(data.get("payload"), "payload")
        return Installed(
            http_url=_require_str(payload, "http_url"),
            ws_url=_require_str(payload, "ws_url"),
        )


class RegisteredSchema(ResponseSchema):
    result_type = Registered

    def decode_success(self, data: dict) -> Registered:  # noqa: ARG002
        return Registered()


class LoggedInSchema(ResponseSchema):
    result_type = LoggedIn

    def decode_success(self, data: dict) -> LoggedIn:
        if "token" in data:
            return LoggedIn(token=_require_str(data, "token"))
        payload = _require_mapping(data.get("payload"), "payload")
        return LoggedIn(token=_require_str(payload, "token"))


SCHEMAS: dict[Action, ResponseSchema] = {
    Action.CREATE: CreatedSchema(),
    Action.FIND: FoundSchema(),
    Action.INSTALL: InstalledSchema(),
    Action.REGISTER: RegisteredSchema(),
    Action.LOGIN: LoggedInSchema(),
}


def schema_for(action: Action) -> ResponseSchema:
    try:
        return SCHEMAS[action]
    except KeyError:
        raise ValueError(f"no response schema for action: {action.value}") from None


def decode_response(
    action: Action,
    text: str,
    *,
    status_code: int | None = None,
    http_reason: str = "",
) -> DecodedResponse:
    """Decode response ``text`` for ``action``.

    When ``status_code`` is outside 2xx and the body holds no tagged failure, the
    result is a ``Failure`` naming the HTTP status.
    """
    schema = schema_for(action)
    http_failed = status_code is not None and not 200 <= status_code < 300

    try:
        data = json.loads(text)
        result = schema.decode(_require_mapping(data, "response"))
    except (ValueError, TypeError, RecursionError) as exc:
        if http_failed:
            body = text.strip()
            return Failure(status=f"http error {status_code}", reason=body or http_reason or str(exc))
        return Failure(status=JSON_PARSE_ERROR, reason=str(exc) or type(exc).__name__)

    if http_failed and not isinstance(result, Failure):
        return Failure(status=f"http error {status_code}", reason=http_reason or text.strip())
    logger.debug("decoded %s response as %s", action.value, type(result).__name__)
    return result


__all__ = [
    "Created",
    "DecodedResponse",
    "Failure",
    "Found",
    "Installed",
    "JSON_PARSE_ERROR",
    "LoggedIn",
    "Registered",
    "ResponseSchema",
    "SCHEMAS",
    "decode_response",
    "schema_for",
]
