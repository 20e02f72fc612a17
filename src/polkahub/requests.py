"""Request builders for the registry endpoints."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from polkahub.actions import Action
from polkahub.errors import InputValidationError
from polkahub.hub import HubDescriptor, read_hub_file

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 50

PROJECT_NAME = re.compile(r"^[a-z0-9-]+$")
INSTALL_NAME = re.compile(
    r"^(?:(?P<login>[\w-]+)/)?(?P<name>[a-z0-9-]+)@(?P<version>[\w.+-]+)$"
)
INSTALL_FORMAT_REASON = (
    "You must provide specific version to install: <project>@<version> "
    "(or <login>/<project>@<version>)"
)

ENDPOINT_PATHS = {
    Action.CREATE: "/api/v1/projects",
    Action.FIND: "/api/v1/find",
    Action.INSTALL: "/api/v1/install",
    Action.REGISTER: "/api/v1/signup",
    Action.LOGIN: "/api/v1/login",
}


class AuthMode(str, Enum):
    NONE = "none"
    BEARER_TOKEN = "bearer"


@dataclass(frozen=True)
class RequestFields:
    name: str | None = None
    alias: str | None = None
    hub_file: str | None = None
    email: str | None = None
    password: str | None = None


@dataclass(frozen=True)
class RequestSpec:
    action: Action
    path: str
    body: dict
    auth: AuthMode
    description: str


@dataclass(frozen=True)
class ProjectMetadata:
    name: str
    version: str
    login: str | None = None


def auth_mode_for(action: Action) -> AuthMode:
    return AuthMode.BEARER_TOKEN if action.requires_token else AuthMode.NONE


def check_project_name(name: str) -> str:
    if not PROJECT_NAME.match(name):
        raise InputValidationError(
            "Project name must consist only from 'a'-'z' '0'-'9', '-'."
        )
    return name


def _require_name(value: str | None, reason: str) -> str:
    name = (value or "").strip()
    if not name:
        raise InputValidationError(reason)
    return name


def parse_install_name(value: str | None) -> ProjectMetadata:
    match = INSTALL_NAME.match((value or "").strip())
    if match is None:
        raise InputValidationError(INSTALL_FORMAT_REASON)
    return ProjectMetadata(
        name=match.group("name"),
        version=match.group("version"),
        login=match.group("login"),
    )


def validate_email(email: str | None) -> str:
    value = (email or "").strip()
    if "@" not in value:
        raise InputValidationError("Email is invalid")
    return value


def validate_password(password: str | None) -> str:
    value = password or ""
    if len(value) < MIN_PASSWORD_LENGTH:
        raise InputValidationError(f"Password shorter than {MIN_PASSWORD_LENGTH} characters")
    if len(value) > MAX_PASSWORD_LENGTH:
        raise InputValidationError(f"Password longer than {MAX_PASSWORD_LENGTH} characters")
    return value


def resolve_install_target(
    metadata: ProjectMetadata,
    *,
    hub: HubDescriptor | None,
    alias: str | None,
) -> tuple[str, str]:
    """Pick the deployed name and version: hub manifest, then alias, then parsed values."""
    if hub is not None:
        return hub.name, hub.version
    if alias and alias.strip():
        return alias.strip(), metadata.version
    return metadata.name, metadata.version


def build_create_request(fields: RequestFields) -> RequestSpec:
    name = _require_name(fields.name, "You must provide name to create a project.")
    check_project_name(name)
    return RequestSpec(
        action=Action.CREATE,
        path=ENDPOINT_PATHS[Action.CREATE],
        body={"project_name": name},
        auth=auth_mode_for(Action.CREATE),
        description=f"Creating {name} project",
    )


def build_find_request(fields: RequestFields) -> RequestSpec:
    name = _require_name(fields.name, "You must provide a project name to look for.")
    return RequestSpec(
        action=Action.FIND,
        path=ENDPOINT_PATHS[Action.FIND],
        body={"project_name": name},
        auth=auth_mode_for(Action.FIND),
        description=f"Looking for {name} project",
    )


def build_install_request(
    fields: RequestFields,
    *,
    hub_reader: Callable[[str | Path | None], HubDescriptor | None] = read_hub_file,
) -> RequestSpec:
    metadata = parse_install_name(fields.name)
    hub = hub_reader(fields.hub_file)
    app_name, version = resolve_install_target(metadata, hub=hub, alias=fields.alias)
    check_project_name(app_name)

    body = {
        "app_name": app_name,
        "project_name": metadata.name,
        "version": version,
    }
    if metadata.login:
        body["login"] = metadata.login
    return RequestSpec(
        action=Action.INSTALL,
        path=ENDPOINT_PATHS[Action.INSTALL],
        body=body,
        auth=auth_mode_for(Action.INSTALL),
        description=f"Deploying {app_name} project with version {version}",
    )


def build_register_request(fields: RequestFields) -> RequestSpec:
    email = validate_email(fields.email)
    password = validate_password(fields.password)
    return RequestSpec(
        action=Action.REGISTER,
        path=ENDPOINT_PATHS[Action.REGISTER],
        body={"email": email, "password": password},
        auth=auth_mode_for(Action.REGISTER),
        description=f"Registration new user with email {email}",
    )


def build_login_request(fields: RequestFields) -> RequestSpec:
    email = validate_email(fields.email)
    password = validate_password(fields.password)
    return RequestSpec(
        action=Action.LOGIN,
        path=ENDPOINT_PATHS[Action.LOGIN],
        body={"email": email, "password": password},
        auth=auth_mode_for(Action.LOGIN),
        description=f"Login user with email {email}",
    )


def build_request(
    action: Action,
    fields: RequestFields,
    *,
    hub_reader: Callable[[str | Path | None], HubDescriptor | None] = read_hub_file,
) -> RequestSpec:
    if action is Action.CREATE:
        return build_create_request(fields)
    if action is Action.FIND:
        return build_find_request(fields)
    if action is Action.INSTALL:
        return build_install_request(fields, hub_reader=hub_reader)
    if action is Action.REGISTER:
        return build_register_request(fields)
    if action is Action.LOGIN:
        return build_login_request(fields)
    raise ValueError(f"no request is sent for action: {action.value}")


__all__ = [
    "AuthMode",
    "auth_mode_for",
    "ENDPOINT_PATHS",
    "INSTALL_FORMAT_REASON",
    "MAX_PASSWORD_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "ProjectMetadata",
    "RequestFields",
    "RequestSpec",
    "build_request",
    "check_project_name",
    "parse_install_name",
    "resolve_install_target",
    "validate_email",
    "validate_password",
]
