"""modegate - mode-based tool gating for autonomous coding agents."""
from __future__ import annotations

__version__ = "0.1.0"

from modegate.engine import (
    GateConfig,
    Mode,
    ModeState,
    ToolCallGate,
    Verdict,
    check_bash_command,
)

__all__ = [
    "GateConfig",
    "Mode",
    "ModeState",
    "ToolCallGate",
    "Verdict",
    "__version__",
    "check_bash_command",
]
