"""Core data models for the mode gate.

All dataclasses, enums, and type aliases. Single source of truth
to avoid circular imports.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Mode(str, Enum):
    """Agent operating modes. See lifecycle.py for the cycle order."""
    ASK = "ask"
    PLAN = "plan"
    BUILD = "build"


MODE_LABELS: dict[Mode, str] = {
    Mode.ASK: "\U0001f50d ask",
    Mode.PLAN: "\U0001f4cb plan",
    Mode.BUILD: "\U0001f528 build",
}

# Theme color names used by the status indicator.
MODE_COLORS: dict[Mode, str] = {
    Mode.ASK: "accent",
    Mode.PLAN: "warning",
    Mode.BUILD: "success",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Verdict:
    """Classifier output: allowed, or blocked with a reason."""
    allowed: bool = True
    reason: str | None = None

    @classmethod
    def allow(cls) -> Verdict:
        return cls()

    @classmethod
    def block(cls, reason: str) -> Verdict:
        return cls(allowed=False, reason=reason)

    @property
    def blocked(self) -> bool:
        return not self.allowed


ALLOWED = Verdict.allow()


@dataclass
class ToolCallEvent:
    """An outgoing tool invocation as seen by the gate."""
    tool_name: str
    input: dict[str, Any] = field(default_factory=dict)


@dataclass
class BlockResult:
    """Structured refusal returned to the invoking agent."""
    reason: str
    block: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"block": self.block, "reason": self.reason}


@dataclass
class ContextMessage:
    """Ephemeral instruction injected into the agent's context for one turn."""
    custom_type: str
    content: str
    display: bool = False


@dataclass
class SessionEntry:
    """One typed record in the append-only session log."""
    custom_type: str
    data: dict[str, Any] = field(default_factory=dict)
    type: str = "custom"
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "custom_type": self.custom_type,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> SessionEntry:
        ts = raw.get("timestamp")
        try:
            timestamp = datetime.fromisoformat(ts) if ts else _utcnow()
        except (TypeError, ValueError):
            timestamp = _utcnow()
        data = raw.get("data")
        return cls(
            custom_type=str(raw.get("custom_type", "")),
            data=data if isinstance(data, dict) else {},
            type=str(raw.get("type", "custom")),
            timestamp=timestamp,
        )
