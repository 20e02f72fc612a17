"""Subcommand resolution."""

from __future__ import annotations

from enum import Enum

from polkahub.errors import INPUT_ERROR_STATUS, Failure

HELP_NOTION = "Try running `polkahub help` to see all available options"


class Action(str, Enum):
    CREATE = "create"
    FIND = "find"
    INSTALL = "install"
    REGISTER = "register"
    LOGIN = "auth"
    HELP = "help"

    @property
    def requires_token(self) -> bool:
        return self in (Action.CREATE, Action.FIND, Action.INSTALL)


def resolve_action(raw: str | None) -> Action | Failure:
    """Map a raw subcommand to an :class:`Action`.

    Unknown input is returned as an input-error :class:`Failure` rather than raised.
    """
    value = (raw or "").strip()
    for action in Action:
        if action.value == value:
            return action
    return Failure(
        status=INPUT_ERROR_STATUS,
        reason=f"{value} - is invalid action. {HELP_NOTION}",
    )


__all__ = ["Action", "HELP_NOTION", "resolve_action"]
