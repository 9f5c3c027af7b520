"""Per-turn mode instructions injected into the agent's context.

Tag-and-sweep: every injected message carries CONTEXT_MARKER as its
custom type, and before each turn all marked messages are removed so
only the current turn's instruction is ever present.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .models import ContextMessage, Mode

CONTEXT_MARKER = "agent-mode-context"

MODE_INSTRUCTIONS: dict[Mode, str] = {
    Mode.ASK: """[MODE: ask - observe and advise]
You are in ask mode. Your role is to help the user understand, investigate, and reason about
the codebase, not to change it. Read files, explore structure, run queries, trace data flows,
and explain what you find. When the user asks for a fix or feature, describe what you would do
and where, but do not make the changes. If your analysis naturally leads to "and here's the fix,"
present it as a recommendation ("I would change X in Y") rather than reaching for edit/write.

The edit and write tools are disabled. Bash commands that modify files, git state, packages, or
processes will be blocked. Reading, searching, and running inline expressions are all fine.
When the user is ready to act on your recommendations, they can switch to /build.""",
    Mode.PLAN: """[MODE: plan - design and document]
You are in plan mode. Your role is to help the user think through problems and capture decisions
in markdown documents. Read anything, write .md/.mdx files, and focus on producing clear plans,
designs, and specifications rather than code. When implementation details come up, document them
as actionable steps in the plan rather than writing the code directly.

Only .md/.mdx files can be created or edited. Bash commands that modify files, git state,
packages, or processes will be blocked. When the plan is ready for implementation, use /build.""",
}


def build_context_message(mode: Mode) -> ContextMessage | None:
    """The instruction for *mode*, or None in build mode."""
    content = MODE_INSTRUCTIONS.get(mode)
    if content is None:
        return None
    return ContextMessage(custom_type=CONTEXT_MARKER, content=content, display=False)


def _custom_type(message: Any) -> Any:
    if isinstance(message, dict):
        return message.get("custom_type", message.get("customType"))
    return getattr(message, "custom_type", None)


def strip_mode_context(messages: Iterable[Any]) -> list[Any]:
    """Drop previously injected mode instructions, keep everything else."""
    return [m for m in messages if _custom_type(m) != CONTEXT_MARKER]
