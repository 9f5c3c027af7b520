"""Reduce a command segment to its base command and arguments."""
from __future__ import annotations

import re
from dataclasses import dataclass

from .catalog import DURATION_RE, WRAPPER_COMMANDS

_ASSIGNMENTS_RE = re.compile(r"^(?:[A-Za-z_][A-Za-z0-9_]*=\S*\s+)+")


@dataclass(frozen=True)
class NormalizedCommand:
    command: str = ""
    rest: str = ""

    @property
    def full(self) -> str:
        """``"<command> <rest>"`` as matched against the catalog."""
        return f"{self.command} {self.rest}".strip()


def _strip_wrapper(tokens: list[str]) -> list[str]:
    """Drop one leading wrapper token and its options.

    Only a single layer is removed: ``nice timeout 5 rm x`` normalizes
    to ``timeout``.
    """
    if len(tokens) < 2:
        return tokens
    spec = WRAPPER_COMMANDS.get(tokens[0])
    if spec is None:
        return tokens

    i = 1
    while i < len(tokens) and tokens[i].startswith("-"):
        flag = tokens[i]
        i += 1
        if flag in spec.value_flags and i < len(tokens):
            i += 1
    if spec.takes_duration and i < len(tokens) and DURATION_RE.match(tokens[i]):
        i += 1
    return tokens[i:]


def extract_command(segment: str) -> NormalizedCommand:
    """Strip env assignments, one wrapper, and the path prefix.

    ``FOO=1 timeout 5 /usr/bin/rm -rf x`` becomes ``("rm", "-rf x")``.
    """
    s = _ASSIGNMENTS_RE.sub("", (segment or "").strip())
    tokens = _strip_wrapper(s.split())
    if not tokens:
        return NormalizedCommand()

    raw = tokens[0]
    # /usr/bin/grep -> grep, .venv/bin/python3 -> python3
    base = raw.rsplit("/", 1)[-1] or raw
    return NormalizedCommand(command=base, rest=" ".join(tokens[1:]))
