"""Tool-call gate: allow or block each tool invocation for the active mode.

build: everything passes.
ask:   edit/write blocked; bash must not mutate.
plan:  edit/write only on .md/.mdx paths; bash must not mutate.

The gate does no I/O and never raises. An allow is ``None`` and falls
through to normal tool execution.
"""
from __future__ import annotations

import logging
import re
from typing import Any

from .command_policy import check_bash_command
from .command_policy.catalog import DEFAULT_PREVIEW_LENGTH
from .models import MODE_LABELS, BlockResult, Mode, ToolCallEvent
from .mode_state import ModeState

logger = logging.getLogger(__name__)

FILE_TOOLS = frozenset({"edit", "write"})
BASH_TOOL = "bash"
PATH_PREFIX_MARKER = "@"
MARKDOWN_PATH_RE = re.compile(r"\.mdx?$", re.IGNORECASE)

ASK_FILE_REASON = "Ask mode: file modifications are disabled. Use /build to enable."
PLAN_FILE_REASON = "Plan mode: can only {verb} .md/.mdx files. Use /build for full access."


def is_markdown_path(path: str) -> bool:
    """True for .md/.mdx paths, ignoring a leading ``@`` reference marker."""
    p = path
    if p.startswith(PATH_PREFIX_MARKER):
        p = p[len(PATH_PREFIX_MARKER):]
    return MARKDOWN_PATH_RE.search(p.strip()) is not None


def as_tool_call_event(event: ToolCallEvent | dict[str, Any]) -> ToolCallEvent:
    """Accept host payloads keyed ``tool_name`` or ``toolName``."""
    if isinstance(event, ToolCallEvent):
        return event
    return ToolCallEvent(
        tool_name=str(event.get("tool_name", event.get("toolName", ""))),
        input=event.get("input") or {},
    )


def _text_input(event: ToolCallEvent, key: str) -> str:
    value = (event.input or {}).get(key)
    return value if isinstance(value, str) else ""


class ToolCallGate:
    """Consults the mode state and the classifier for each tool call."""

    def __init__(
        self,
        state: ModeState,
        *,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
    ) -> None:
        self._state = state
        self._preview_length = preview_length

    def evaluate(self, event: ToolCallEvent | dict[str, Any]) -> BlockResult | None:
        return self.decide(event)[1]

    def decide(
        self, event: ToolCallEvent | dict[str, Any],
    ) -> tuple[Mode, BlockResult | None]:
        """Like evaluate, but also return the mode the decision was made in."""
        event = as_tool_call_event(event)

        with self._state.locked() as mode:
            result = self._decide(mode, event)

        if result is not None:
            logger.info(
                "Blocked %s call in %s mode: %s",
                event.tool_name, mode.value, result.reason,
            )
        return mode, result

    def _decide(self, mode: Mode, event: ToolCallEvent) -> BlockResult | None:
        if mode is Mode.BUILD:
            return None

        tool = event.tool_name
        if tool in FILE_TOOLS:
            if mode is Mode.ASK:
                return BlockResult(reason=ASK_FILE_REASON)
            if not is_markdown_path(_text_input(event, "path")):
                return BlockResult(reason=PLAN_FILE_REASON.format(verb=tool))
            return None

        if tool == BASH_TOOL:
            verdict = check_bash_command(
                _text_input(event, "command"),
                preview_length=self._preview_length,
            )
            if verdict.blocked:
                return BlockResult(
                    reason=(
                        f"{MODE_LABELS[mode]} mode - blocked: {verdict.reason}. "
                        "Use /build to enable."
                    ),
                )
        return None
