"""Split a shell command string into independently executed segments.

Splitting is purely lexical. Delimiters inside quoted strings are still
treated as delimiters, so ``echo 'a && b'`` yields two segments. A full
shell grammar is not worth carrying for a best-effort policy filter.
"""
from __future__ import annotations

import re

_CHAIN_RE = re.compile(r"\s*(?:&&|\|\||;)\s*")
_PIPE_RE = re.compile(r"\s*\|\s*")


def split_commands(command: str) -> list[str]:
    """Split on chain operators (&&, ||, ;) and then on pipes (|)."""
    segments: list[str] = []
    for chain in _CHAIN_RE.split(command or ""):
        for piece in _PIPE_RE.split(chain):
            trimmed = piece.strip()
            if trimmed:
                segments.append(trimmed)
    return segments
