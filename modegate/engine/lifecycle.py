"""Mode cycle and per-mode tool policy tables.

Cycle Diagram:

    ASK ──> PLAN ──> BUILD ──┐
     ^                       │
     └───────────────────────┘

Tool policy is deny-by-name: each mode lists the tools it removes and
every other registered tool stays available, including tools added by
unrelated extensions.
"""
from __future__ import annotations

from .errors import InvalidModeError
from .models import Mode

MODE_CYCLE: tuple[Mode, ...] = (Mode.ASK, Mode.PLAN, Mode.BUILD)

DENY_LISTS: dict[Mode, frozenset[str]] = {
    Mode.ASK: frozenset({"edit", "write"}),
    Mode.PLAN: frozenset(),
    Mode.BUILD: frozenset(),
}


def next_mode(current: Mode) -> Mode:
    """Return the mode after *current* in the fixed cycle order."""
    idx = MODE_CYCLE.index(current)
    return MODE_CYCLE[(idx + 1) % len(MODE_CYCLE)]


def deny_list(mode: Mode) -> frozenset[str]:
    """Tool names removed from the active set in *mode*."""
    return DENY_LISTS[mode]


def allowed_tools(mode: Mode, all_tools: list[str]) -> list[str]:
    """Registered tools minus the mode's deny list, in registry order."""
    deny = deny_list(mode)
    return [name for name in all_tools if name not in deny]


def parse_mode(value: object) -> Mode:
    """Parse a mode name. Raises InvalidModeError outside the closed set."""
    if isinstance(value, Mode):
        return value
    if isinstance(value, str):
        cleaned = value.strip().lower()
        for mode in MODE_CYCLE:
            if mode.value == cleaned:
                return mode
    raise InvalidModeError(value, [m.value for m in MODE_CYCLE])


def coerce_mode(value: object, default: Mode = Mode.BUILD) -> Mode:
    """Match a persisted mode value exactly, falling back to *default*."""
    for mode in MODE_CYCLE:
        if value == mode.value:
            return mode
    return default
