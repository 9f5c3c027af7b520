"""Mode gate engine - mode state, command classifier and tool-call gate."""
from .models import (
    ALLOWED,
    MODE_COLORS,
    MODE_LABELS,
    BlockResult,
    ContextMessage,
    Mode,
    SessionEntry,
    ToolCallEvent,
    Verdict,
)
from .errors import ConfigError, InvalidModeError, ModeGateError
from .config import GateConfig
from .lifecycle import DENY_LISTS, MODE_CYCLE, allowed_tools, next_mode, parse_mode
from .mode_state import MODE_ENTRY_TYPE, ModeState
from .context import CONTEXT_MARKER, build_context_message, strip_mode_context
from .command_policy import check_bash_command, extract_command, split_commands
from .gate import ToolCallGate, is_markdown_path

__all__ = [
    # Models
    "ALLOWED",
    "BlockResult",
    "ContextMessage",
    "MODE_COLORS",
    "MODE_LABELS",
    "Mode",
    "SessionEntry",
    "ToolCallEvent",
    "Verdict",
    # Errors
    "ConfigError",
    "InvalidModeError",
    "ModeGateError",
    # Config
    "GateConfig",
    "load_yaml_config",
    # State machine
    "DENY_LISTS",
    "MODE_CYCLE",
    "MODE_ENTRY_TYPE",
    "ModeState",
    "allowed_tools",
    "next_mode",
    "parse_mode",
    # Turn context
    "CONTEXT_MARKER",
    "build_context_message",
    "strip_mode_context",
    # Classifier + gate
    "ToolCallGate",
    "check_bash_command",
    "extract_command",
    "is_markdown_path",
    "split_commands",
]


def __getattr__(name: str):
    """Lazy import for the YAML loader so PyYAML loads only when used."""
    if name == "load_yaml_config":
        from .yaml_config import load_yaml_config
        return load_yaml_config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
