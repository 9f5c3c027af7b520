"""Display events emitted by the mode gate.

Each event is a typed dataclass so UI consumers (status bars, logs)
can match on it safely.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class GateEvent:
    """Base event from the mode gate."""
    event_type: str = ""


@dataclass
class ModeChanged(GateEvent):
    event_type: str = "mode_changed"
    mode: str = ""
    label: str = ""
    color: str = ""


@dataclass
class ToolCallBlocked(GateEvent):
    event_type: str = "tool_call_blocked"
    mode: str = ""
    tool_name: str = ""
    reason: str = ""


# Map of event type strings to dataclass constructors
_EVENT_MAP: dict[str, type[GateEvent]] = {
    "mode_changed": ModeChanged,
    "tool_call_blocked": ToolCallBlocked,
}


def event_to_dict(event: GateEvent) -> dict[str, Any]:
    """Convert a typed event dataclass to a plain dict for JSON serialization."""
    d: dict[str, Any] = {}
    for f in event.__dataclass_fields__:
        val = getattr(event, f)
        if val is not None:
            d[f] = val
    if "event_type" in d:
        d["event"] = d.pop("event_type")
    return d


def dict_to_event(data: dict[str, Any]) -> GateEvent:
    """Convert an event dict back to a typed event dataclass."""
    event_type = data.get("event", "")
    cls = _EVENT_MAP.get(event_type, GateEvent)
    valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    if "event" in data and "event_type" not in filtered:
        filtered["event_type"] = data["event"]
    return cls(**filtered)
