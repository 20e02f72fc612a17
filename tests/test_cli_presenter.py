from __future__ import annotations

import io
import json

import pytest

from polkahub.actions import Action
from polkahub.cli.console import HubConsole
from polkahub.cli.presenter import (
    EXIT_AUTH_ERROR,
    EXIT_REGISTRY_FAILURE,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    present,
)
from polkahub.errors import Failure, ResponseContractError
from polkahub.responses import Created, Found, Installed, LoggedIn, Registered
from polkahub.token_store import TokenStore


def _console() -> tuple[HubConsole, io.StringIO, io.StringIO]:
    out = io.StringIO()
    err = io.StringIO()
    return HubConsole(stdout=out, stderr=err), out, err


def test_found_prints_one_line_per_version() -> None:
    console, out, _ = _console()
    rc = present(Found(versions=("1.0.0", "1.1.0")), action=Action.FIND, console=console, name="chain-a")
    assert rc == EXIT_SUCCESS
    assert out.getvalue().splitlines() == ["chain-a 1.0.0", "chain-a 1.1.0"]


def test_found_empty_prints_no_versions_message() -> None:
    console, out, _ = _console()
    rc = present(Found(versions=()), action=Action.FIND, console=console, name="chain-a")
    assert rc == EXIT_SUCCESS
    assert out.getvalue().splitlines() == ["Looks like no versions deployed yet!"]


def test_created_prints_endpoints() -> None:
    console, out, _ = _console()
    created = Created(
        repo_url="git@hub.example:chain-a.git",
        http_url="https://chain-a.example",
        ws_url="wss://chain-a.example",
        repository_created=True,
    )
    assert present(created, action=Action.CREATE, console=console) == EXIT_SUCCESS
    assert out.getvalue().splitlines() == [
        "done",
        "https  -> https://chain-a.example",
        "ws     -> wss://chain-a.example",
        "remote -> git@hub.example:chain-a.git",
    ]


def test_installed_and_registered_print_done() -> None:
    console, out, _ = _console()
    present(Installed(http_url="https://h", ws_url="wss://w"), action=Action.INSTALL, console=console)
    present(Registered(), action=Action.REGISTER, console=console)
    assert out.getvalue().splitlines() == ["done", "https  -> https://h", "ws     -> wss://w", "done"]


def test_logged_in_persists_token(tmp_path) -> None:
    console, out, _ = _console()
    store = TokenStore(path=tmp_path / "config")
    rc = present(LoggedIn(token="tok-1"), action=Action.LOGIN, console=console, token_store=store)
    assert rc == EXIT_SUCCESS
    assert out.getvalue().strip() == "done"
    assert store.load_token() == "tok-1"


def test_logged_in_reports_persistence_failure(tmp_path) -> None:
    console, out, err = _console()
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = TokenStore(path=blocker / "config")
    rc = present(LoggedIn(token="tok-1"), action=Action.LOGIN, console=console, token_store=store)
    assert rc == EXIT_AUTH_ERROR
    assert "Could not login." in err.getvalue()
    assert out.getvalue() == ""


def test_failure_prints_framed_banner() -> None:
    console, out, err = _console()
    rc = present(
        Failure(status="error", reason="project already exists"),
        action=Action.CREATE,
        console=console,
    )
    assert rc == EXIT_REGISTRY_FAILURE
    assert out.getvalue() == ""
    assert err.getvalue().splitlines() == [
        "Could not create project.",
        " —————",
        " error",
        " —————",
        "project already exists",
    ]


def test_input_failure_exit_code() -> None:
    console, _, _ = _console()
    rc = present(Failure(status="input error", reason="bad"), action=Action.FIND, console=console)
    assert rc == EXIT_VALIDATION_ERROR


def test_json_output() -> None:
    console, out, _ = _console()
    present(Found(versions=("1.0.0",)), action=Action.FIND, console=console, name="x", as_json=True)
    assert json.loads(out.getvalue()) == {"payload": ["1.0.0"], "status": "ok"}


def test_json_login_output_hides_token(tmp_path) -> None:
    console, out, _ = _console()
    store = TokenStore(path=tmp_path / "config")
    present(LoggedIn(token="secret-tok"), action=Action.LOGIN, console=console, token_store=store, as_json=True)
    assert "secret-tok" not in out.getvalue()
    assert json.loads(out.getvalue()) == {"status": "ok", "token_stored": True}


def test_variant_mismatch_is_contract_violation() -> None:
    console, _, _ = _console()
    with pytest.raises(ResponseContractError):
        present(
            Created(repo_url="r", http_url="h", ws_url="w", repository_created=False),
            action=Action.FIND,
            console=console,
        )
