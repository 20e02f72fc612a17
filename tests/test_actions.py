from __future__ import annotations

import pytest

from polkahub.actions import HELP_NOTION, Action, resolve_action
from polkahub.errors import Failure


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("create", Action.CREATE),
        ("find", Action.FIND),
        ("install", Action.INSTALL),
        ("register", Action.REGISTER),
        ("auth", Action.LOGIN),
        ("help", Action.HELP),
    ],
)
def test_resolve_known_actions(raw: str, expected: Action) -> None:
    assert resolve_action(raw) is expected


@pytest.mark.parametrize("raw", ["", "login", "CREATE", "deploy", "--", None])
def test_unknown_action_is_input_error(raw) -> None:
    result = resolve_action(raw)
    assert isinstance(result, Failure)
    assert result.status == "input error"
    assert HELP_NOTION in result.reason


def test_only_project_actions_require_token() -> None:
    assert {a for a in Action if a.requires_token} == {Action.CREATE, Action.FIND, Action.INSTALL}
