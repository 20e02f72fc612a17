"""Interactive credential prompt."""

from __future__ import annotations

import getpass
from collections.abc import Callable
from dataclasses import dataclass

from polkahub.errors import InputValidationError
from polkahub.requests import validate_email, validate_password


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


def prompt_credentials(
    *,
    confirm: bool,
    read_line: Callable[[str], str] = input,
    read_secret: Callable[[str], str] = getpass.getpass,
) -> Credentials:
    """Ask for email and password; validates both before returning.

    With ``confirm`` the password is asked twice and both entries must match.
    """
    email = validate_email(read_line("Email: "))
    password = read_secret("Password: ")
    confirmation = read_secret("Confirm Password: ") if confirm else password
    validate_password(password)
    if password != confirmation:
        raise InputValidationError("Password does not equal Confirm password")
    return Credentials(email=email, password=password)


__all__ = ["Credentials", "prompt_credentials"]
