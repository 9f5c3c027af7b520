"""Decide whether a bash command string is safe in a read-only mode.

Two phases:

1. Whole-string shell-escape check (``eval``, ``exec``, ``sh -c``...),
   run before segmentation since those constructs hide a nested
   command from every per-segment rule.
2. Per-segment checks on each piece of the chain, first block wins:
   file redirection, the mutating-command catalog, mutating SQL for
   sqlite3, and interpreters running a script file.

Everything here is a pure function of the input string.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from modegate.engine.models import ALLOWED, Verdict

from .catalog import (
    DEFAULT_PREVIEW_LENGTH,
    DOUBLE_QUOTED_RE,
    FILE_REDIRECT_RE,
    MUTATING_COMMANDS,
    MUTATING_SQL_RE,
    SCRIPT_INTERPRETERS,
    SHELL_ESCAPE_PATTERNS,
    SINGLE_QUOTED_RE,
    SQL_CLIENTS,
)
from .normalizer import NormalizedCommand, extract_command
from .segmenter import split_commands

logger = logging.getLogger(__name__)


def has_file_redirect(segment: str) -> bool:
    """True if the segment redirects output to a file.

    Quoted literals are blanked first so ``echo "a => b"`` does not
    count. ``>=``, ``=>`` and ``>&`` never count.
    """
    stripped = DOUBLE_QUOTED_RE.sub('""', segment)
    stripped = SINGLE_QUOTED_RE.sub("''", stripped)
    return FILE_REDIRECT_RE.search(stripped) is not None


def check_shell_escape(command: str) -> Verdict:
    trimmed = (command or "").strip()
    for rule in SHELL_ESCAPE_PATTERNS:
        if rule.pattern.search(trimmed):
            return Verdict.block(f"{rule.label} can execute arbitrary code")
    return ALLOWED


def check_segment(
    segment: str,
    *,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
) -> Verdict:
    """Classify a single chain/pipe segment."""
    if has_file_redirect(segment):
        return Verdict.block("output redirection writes to disk")

    normalized = extract_command(segment)
    cmd, rest = normalized.command, normalized.rest
    if not cmd:
        return ALLOWED

    full = normalized.full
    for rule in MUTATING_COMMANDS:
        if rule.pattern.search(full):
            logger.debug("Segment %r matched %s rule %s", full, rule.category, rule.pattern.pattern)
            return Verdict.block(f'"{full[:preview_length]}" is a mutating command')

    if cmd in SQL_CLIENTS and MUTATING_SQL_RE.search(rest):
        return Verdict.block(f"{cmd} with mutating SQL")

    if cmd in SCRIPT_INTERPRETERS and rest and not rest.startswith("-"):
        first = rest.split()[0]
        return Verdict.block(f'"{cmd} {first}" runs a script file')

    return ALLOWED


def check_bash_command(
    command: str,
    *,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
) -> Verdict:
    """Classify a full command string. Blocked if any phase blocks."""
    verdict = check_shell_escape(command)
    if verdict.blocked:
        return verdict

    for segment in split_commands((command or "").strip()):
        verdict = check_segment(segment, preview_length=preview_length)
        if verdict.blocked:
            return verdict
    return ALLOWED


@dataclass(frozen=True)
class SegmentReport:
    segment: str
    normalized: NormalizedCommand
    verdict: Verdict


def explain_command(
    command: str,
    *,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
) -> list[SegmentReport]:
    """Per-segment breakdown used by the CLI ``explain`` subcommand."""
    return [
        SegmentReport(
            segment=segment,
            normalized=extract_command(segment),
            verdict=check_segment(segment, preview_length=preview_length),
        )
        for segment in split_commands((command or "").strip())
    ]
