from __future__ import annotations

import os
from pathlib import Path

import pytest

from polkahub import toml_io
from polkahub.errors import AuthenticationMissingError, ConfigError, TokenStoreError
from polkahub.token_store import TokenStore, default_config_path, polkahub_home


def test_polkahub_home_prefers_env_override(tmp_path) -> None:
    env = {"POLKAHUB_HOME": str(tmp_path / "hub"), "HOME": "/home/someone"}
    assert polkahub_home(env) == tmp_path / "hub"


def test_polkahub_home_defaults_under_home() -> None:
    assert polkahub_home({"HOME": "/home/someone"}) == Path("/home/someone/.polkahub")
    assert default_config_path({"HOME": "/home/someone"}) == Path("/home/someone/.polkahub/config")


def test_polkahub_home_requires_home() -> None:
    with pytest.raises(ConfigError, match=r"\$HOME"):
        polkahub_home({})


def test_store_then_load_token(tmp_path) -> None:
    store = TokenStore(path=tmp_path / "hub" / "config")
    store.store_token("tok-123")
    assert store.load_token() == "tok-123"
    if os.name == "posix":
        assert (store.path.stat().st_mode & 0o777) == 0o600


def test_store_token_keeps_other_settings(tmp_path) -> None:
    path = tmp_path / "config"
    path.write_text('registry_base = "http://localhost:8080"\ntoken = "old"\n', encoding="utf-8")
    TokenStore(path=path).store_token("new")
    assert toml_io.read(path) == {"registry_base": "http://localhost:8080", "token": "new"}


def test_missing_config_is_authentication_error(tmp_path) -> None:
    with pytest.raises(AuthenticationMissingError, match="register and authenticate"):
        TokenStore(path=tmp_path / "config").load_token()


@pytest.mark.parametrize("content", ["token = \n", 'registry_base = "x"\n', 'token = ""\n', "token = 5\n"])
def test_unreadable_token_is_authentication_error(tmp_path, content: str) -> None:
    path = tmp_path / "config"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(AuthenticationMissingError):
        TokenStore(path=path).load_token()


def test_empty_token_is_not_stored(tmp_path) -> None:
    with pytest.raises(TokenStoreError):
        TokenStore(path=tmp_path / "config").store_token("  ")


def test_store_token_write_failure(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(TokenStoreError):
        TokenStore(path=blocker / "config").store_token("tok")
