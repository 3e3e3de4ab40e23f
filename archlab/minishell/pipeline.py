"""An interactive loop that splits each input line into piped commands."""

from __future__ import annotations

import sys
from typing import TextIO

MAX_COMMANDS = 200
PROMPT = "Shell> "


def split_commands(line: str) -> list[str]:
    """Cut a line at its first newline and split it on ``|``, dropping empty parts."""
    line = line.split("\n", 1)[0]
    return [part for part in line.split("|") if part]


class PipelineShell:
    """Reports the commands found in each line it is fed."""

    def __init__(self, out: TextIO) -> None:
        self.out = out

    def feed(self, line: str) -> list[str]:
        commands = split_commands(line)
        if len(commands) > MAX_COMMANDS:
            raise ValueError(f"more than {MAX_COMMANDS} commands in one line")
        for number, command in enumerate(commands):
            self.out.write(f"Command {number}: {command}\n")
        return commands


def run_shell(stdin: TextIO, out: TextIO) -> None:
    """Prompt, read and report lines until the input ends."""
    shell = PipelineShell(out)
    while True:
        out.write(PROMPT)
        out.flush()
        line = stdin.readline()
        if not line:
            break
        shell.feed(line)


def main(argv: list[str] | None = None) -> int:
    run_shell(sys.stdin, sys.stdout)
    return 0