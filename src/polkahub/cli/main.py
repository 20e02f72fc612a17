"""Command-line interface for polkahub."""

from __future__ import annotations

import argparse
import getpass
import logging
import re
import sys
from collections.abc import Callable
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import Sequence

from polkahub.actions import Action, resolve_action
from polkahub.cli.config import load_cli_config
from polkahub.cli.console import HubConsole
from polkahub.cli.presenter import (
    EXIT_AUTH_ERROR,
    EXIT_NETWORK_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    present,
    present_failure,
)
from polkahub.cli.prompt import prompt_credentials
from polkahub.client import HubClient
from polkahub.errors import (
    AuthenticationMissingError,
    ConfigError,
    Failure,
    InputValidationError,
    RegistryUnavailableError,
)
from polkahub.requests import RequestFields, build_request
from polkahub.responses import decode_response
from polkahub.token_store import TokenStore

_SENSITIVE_FIELDS = ("token", "password", "authorization", "bearer")


def _cli_version() -> str:
    try:
        return pkg_version("polkahub-cli")
    except PackageNotFoundError:
        return "0.0.0+local"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polkahub",
        add_help=False,
        description=(
            "Create projects in the polkahub registry, find their available versions "
            "and deploy a specific version."
        ),
    )
    parser.add_argument("--help", action="help", help="Show this message and exit")
    parser.add_argument(
        "--version",
        action="version",
        version=f"polkahub {_cli_version()}",
    )
    parser.add_argument(
        "action",
        help="create <name>, find <name>, install <name>@<version>, register, auth, help",
    )
    parser.add_argument("name", nargs="?", default=None, help="Project name")
    parser.add_argument(
        "-a",
        "--alias",
        default=None,
        help="Alias your deployed version in your environment",
    )
    parser.add_argument(
        "-h",
        "--hub-file",
        default=None,
        help="Pick up your Hub.toml (file or directory; default: current directory)",
    )
    parser.add_argument(
        "--registry-base",
        default=None,
        help="Registry base URL override (default from config)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=(
            "Path to CLI config TOML, which also stores the bearer token written by `auth` "
            "(default: $POLKAHUB_HOME/config or ~/.polkahub/config)"
        ),
    )
    parser.add_argument("--json", action="store_true", help="Print the registry response as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _sanitize_error_text(value: str) -> str:
    redacted = value
    for field in _SENSITIVE_FIELDS:
        redacted = re.sub(
            rf"(?i)({field}\s*[=:]\s*)([^,\s]+)",
            r"\1[REDACTED]",
            redacted,
        )
    return redacted


def _collect_fields(
    action: Action,
    args,
    *,
    read_line: Callable[[str], str],
    read_secret: Callable[[str], str],
) -> RequestFields:
    email = password = None
    if action in (Action.REGISTER, Action.LOGIN):
        try:
            credentials = prompt_credentials(
                confirm=action is Action.REGISTER,
                read_line=read_line,
                read_secret=read_secret,
            )
        except EOFError as exc:
            raise InputValidationError("no terminal input available for credentials") from exc
        email, password = credentials.email, credentials.password
    return RequestFields(
        name=args.name,
        alias=args.alias,
        hub_file=args.hub_file,
        email=email,
        password=password,
    )


def _run_action(
    action: Action,
    *,
    args,
    console: HubConsole,
    read_line: Callable[[str], str],
    read_secret: Callable[[str], str],
) -> int:
    try:
        config = load_cli_config(args.config)
    except ConfigError as exc:
        return present_failure(
            Failure(status="config error", reason=str(exc)),
            console=console,
            action=action,
            as_json=args.json,
            code=EXIT_AUTH_ERROR,
        )
    token_store = TokenStore(path=config.config_path)

    if action is Action.INSTALL and not args.hub_file and not args.alias:
        console.warn("No Hub.toml path provided, looking in current directory")

    try:
        fields = _collect_fields(action, args, read_line=read_line, read_secret=read_secret)
        spec = build_request(action, fields)
    except InputValidationError as exc:
        return present_failure(exc.failure, console=console, action=action, as_json=args.json)

    console.notice(spec.description)
    client = HubClient(
        base_url=args.registry_base or config.registry_base,
        token_store=token_store,
        progress=console.busy,
    )
    try:
        raw = client.send(spec)
    except AuthenticationMissingError as exc:
        return present_failure(
            Failure(status="authentication error", reason=str(exc)),
            console=console,
            action=action,
            as_json=args.json,
            code=EXIT_AUTH_ERROR,
        )
    except RegistryUnavailableError as exc:
        return present_failure(
            Failure(status="registry error", reason=_sanitize_error_text(str(exc))),
            console=console,
            action=action,
            as_json=args.json,
            code=EXIT_NETWORK_ERROR,
        )

    result = decode_response(
        action,
        raw.text,
        status_code=raw.status_code,
        http_reason=raw.reason,
    )
    return present(
        result,
        action=action,
        console=console,
        token_store=token_store,
        name=spec.body.get("project_name"),
        as_json=args.json,
    )


def main(
    argv: Sequence[str] | None = None,
    *,
    stdout=sys.stdout,
    stderr=sys.stderr,
    read_line: Callable[[str], str] = input,
    read_secret: Callable[[str], str] = getpass.getpass,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=stderr)

    console = HubConsole(stdout=stdout, stderr=stderr)
    action = resolve_action(args.action)
    if isinstance(action, Failure):
        present_failure(action, console=console, as_json=args.json)
        return EXIT_VALIDATION_ERROR

    if action is Action.HELP:
        console.usage()
        return EXIT_SUCCESS

    return _run_action(
        action,
        args=args,
        console=console,
        read_line=read_line,
        read_secret=read_secret,
    )


if __name__ == "__main__":
    raise SystemExit(main())
