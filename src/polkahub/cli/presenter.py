"""Rendering of decoded registry responses."""

from __future__ import annotations

import json
import logging

from polkahub.actions import Action
from polkahub.cli.console import HubConsole
from polkahub.errors import INPUT_ERROR_STATUS, Failure, ResponseContractError, TokenStoreError
from polkahub.responses import (
    Created,
    DecodedResponse,
    Found,
    Installed,
    LoggedIn,
    Registered,
    schema_for,
)
from polkahub.token_store import TokenStore

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 1
EXIT_NETWORK_ERROR = 2
EXIT_AUTH_ERROR = 3
EXIT_REGISTRY_FAILURE = 4

FAILURE_HEADINGS = {
    Action.CREATE: "Could not create project.",
    Action.FIND: "Could not find project.",
    Action.INSTALL: "Could not install project.",
    Action.REGISTER: "Could not register new user.",
    Action.LOGIN: "Could not login.",
}

logger = logging.getLogger(__name__)


def failure_exit_code(failure: Failure) -> int:
    if failure.status == INPUT_ERROR_STATUS:
        return EXIT_VALIDATION_ERROR
    if failure.status.startswith("http error"):
        return EXIT_NETWORK_ERROR
    return EXIT_REGISTRY_FAILURE


def present_failure(
    failure: Failure,
    *,
    console: HubConsole,
    action: Action | None = None,
    as_json: bool = False,
    code: int | None = None,
) -> int:
    if as_json:
        console.out.print_json(json.dumps(failure.as_dict(), sort_keys=True))
    else:
        heading = FAILURE_HEADINGS.get(action) if action is not None else None
        console.failure(failure, heading=heading)
    return failure_exit_code(failure) if code is None else code


def present(
    result: DecodedResponse,
    *,
    action: Action,
    console: HubConsole,
    token_store: TokenStore | None = None,
    name: str | None = None,
    as_json: bool = False,
) -> int:
    """Render ``result`` for ``action`` and return the process exit code."""
    if not schema_for(action).accepts(result):
        raise ResponseContractError(
            f"{type(result).__name__} response is not valid for action {action.value}"
        )

    if isinstance(result, Failure):
        return present_failure(result, console=console, action=action, as_json=as_json)

    if isinstance(result, LoggedIn):
        if token_store is None:
            raise ResponseContractError("login response received without a token store")
        try:
            token_store.store_token(result.token)
        except TokenStoreError as exc:
            return present_failure(
                Failure(status="token store error", reason=str(exc)),
                console=console,
                action=action,
                as_json=as_json,
                code=EXIT_AUTH_ERROR,
            )
        logger.debug("stored token at %s", token_store.path)
        if as_json:
            console.out.print_json(json.dumps({"status": "ok", "token_stored": True}))
        else:
            console.done()
        return EXIT_SUCCESS

    if as_json:
        console.out.print_json(json.dumps(result.as_dict(), sort_keys=True))
        return EXIT_SUCCESS

    if isinstance(result, Created):
        console.done()
        console.endpoint("https ", result.http_url)
        console.endpoint("ws    ", result.ws_url)
        console.endpoint("remote", result.repo_url, style="italic")
    elif isinstance(result, Installed):
        console.done()
        console.endpoint("https ", result.http_url)
        console.endpoint("ws    ", result.ws_url)
    elif isinstance(result, Found):
        if not result.versions:
            console.info("Looks like no versions deployed yet!")
        for version in result.versions:
            console.line(f"{name} {version}")
    elif isinstance(result, Registered):
        console.done()
    return EXIT_SUCCESS


__all__ = [
    "EXIT_AUTH_ERROR",
    "EXIT_NETWORK_ERROR",
    "EXIT_REGISTRY_FAILURE",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "failure_exit_code",
    "present",
    "present_failure",
]
