"""Polkahub registry client public surface."""

from polkahub.actions import Action, resolve_action
from polkahub.client import DEFAULT_REGISTRY_BASE, HubClient, RawResponse
from polkahub.errors import (
    AuthenticationMissingError,
    ConfigError,
    Failure,
    InputValidationError,
    PolkahubError,
    RegistryUnavailableError,
    ResponseContractError,
    TokenStoreError,
)
from polkahub.hub import HubDescriptor, read_hub_file
from polkahub.requests import AuthMode, RequestFields, RequestSpec, build_request, parse_install_name
from polkahub.responses import (
    Created,
    DecodedResponse,
    Found,
    Installed,
    LoggedIn,
    Registered,
    decode_response,
)
from polkahub.token_store import StoredCredential, TokenStore, polkahub_home

__all__ = [
    "PolkahubError",
    "InputValidationError",
    "AuthenticationMissingError",
    "RegistryUnavailableError",
    "TokenStoreError",
    "ResponseContractError",
    "ConfigError",
    "Failure",
    "Action",
    "resolve_action",
    "AuthMode",
    "RequestFields",
    "RequestSpec",
    "build_request",
    "parse_install_name",
    "HubClient",
    "RawResponse",
    "DEFAULT_REGISTRY_BASE",
    "HubDescriptor",
    "read_hub_file",
    "Created",
    "Found",
    "Installed",
    "Registered",
    "LoggedIn",
    "DecodedResponse",
    "decode_response",
    "StoredCredential",
    "TokenStore",
    "polkahub_home",
]
