"""Lexical bash command classification for read-only modes."""
from __future__ import annotations

__all__ = [
    "NormalizedCommand",
    "SegmentReport",
    "check_bash_command",
    "check_segment",
    "check_shell_escape",
    "explain_command",
    "extract_command",
    "has_file_redirect",
    "split_commands",
]

from .classifier import (
    SegmentReport,
    check_bash_command,
    check_segment,
    check_shell_escape,
    explain_command,
    has_file_redirect,
)
from .normalizer import NormalizedCommand, extract_command
from .segmenter import split_commands
