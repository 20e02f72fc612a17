"""Terminal presentation for the polkahub CLI.

Results go to stdout and notices, warnings, failures and the busy spinner go
to stderr.  Color and the spinner only appear when the stream is a terminal.
"""

from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from typing import TextIO

from rich.console import Console
from rich.text import Text

from polkahub.errors import Failure

COMMANDS_HELP = (
    ("help", "list all possible options"),
    ("install", "launch parachain node"),
    ("find", "find all versions of your project"),
    ("create", "register new parachain and create endpoints"),
    ("register", "create a new user in Polkahub"),
    ("auth", "log in to Polkahub"),
)


class HubConsole:
    def __init__(self, *, stdout: TextIO, stderr: TextIO) -> None:
        self.out = Console(file=stdout, highlight=False, soft_wrap=True)
        self.err = Console(file=stderr, highlight=False, soft_wrap=True)

    def line(self, text: str) -> None:
        self.out.print(Text(text))

    def done(self) -> None:
        self.out.print(Text("done", style="bright_green"))

    def endpoint(self, label: str, url: str, *, style: str = "bright_blue") -> None:
        self.out.print(Text.assemble((label, style), f" -> {url}"))

    def info(self, text: str) -> None:
        self.out.print(Text(text, style="bright_green"))

    def notice(self, text: str) -> None:
        self.err.print(Text(text))

    def warn(self, text: str) -> None:
        self.err.print(Text.assemble(("WARN: ", "bright_yellow"), (text, "italic")))

    def failure(self, failure: Failure, *, heading: str | None = None) -> None:
        if heading:
            self.err.print(Text(heading, style="bold red"))
        frame = "—" * len(failure.status)
        self.err.print(Text(f" {frame}"))
        self.err.print(Text(f" {failure.status}", style="red"))
        self.err.print(Text(f" {frame}"))
        self.err.print(Text(failure.reason))

    def usage(self) -> None:
        self.out.print(Text("Usage:"))
        width = max(len(name) for name, _ in COMMANDS_HELP)
        for name, summary in COMMANDS_HELP:
            self.out.print(Text.assemble((name.ljust(width), "bright_blue"), f"  - {summary}"))

    def busy(self, description: str) -> AbstractContextManager:
        if not self.err.is_terminal:
            return nullcontext()
        return self.err.status(description or "working", spinner="dots")


__all__ = ["COMMANDS_HELP", "HubConsole"]
