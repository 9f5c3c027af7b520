"""Agent mode extension: wires the mode state and gate into an agent host.

Three modes control tool access:
- ask:   read-only, no file modifications (chat/explore)
- plan:  read + markdown editing only (writing plans)
- build: full tool access (implementation)

``/ask``, ``/plan`` and ``/build`` set the mode directly; the cycle
shortcut (F2 by default) steps through them. Each transition narrows the
host's active tools, updates the status line, appends a record to the
session log and publishes a ModeChanged event. On session start the
last recorded mode is restored.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from modegate.adapters.event_bus import EventBus
from modegate.adapters.events import ModeChanged, ToolCallBlocked
from modegate.adapters.host import (
    CommandHandler,
    ExtensionContext,
    ExtensionHost,
)
from modegate.engine.config import GateConfig
from modegate.engine.context import build_context_message, strip_mode_context
from modegate.engine.gate import ToolCallGate, as_tool_call_event
from modegate.engine.lifecycle import MODE_CYCLE, allowed_tools
from modegate.engine.mode_state import MODE_ENTRY_TYPE, ModeState
from modegate.engine.models import (
    MODE_COLORS,
    MODE_LABELS,
    BlockResult,
    ContextMessage,
    Mode,
    ToolCallEvent,
)

logger = logging.getLogger(__name__)

STATUS_KEY = "agent-mode"


class AgentModeExtension:
    """Host-facing facade over ModeState and ToolCallGate."""

    def __init__(
        self,
        host: ExtensionHost,
        *,
        config: GateConfig | None = None,
        state: ModeState | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self._host = host
        self._config = config or GateConfig()
        self._state = state or ModeState(self._config.default_mode)
        self._gate = ToolCallGate(
            self._state, preview_length=self._config.preview_length,
        )
        self._event_bus = event_bus
        self._ctx: ExtensionContext | None = None
        self._state.add_listener(self._apply_mode)

    @property
    def state(self) -> ModeState:
        return self._state

    @property
    def gate(self) -> ToolCallGate:
        return self._gate

    @property
    def mode(self) -> Mode:
        return self._state.mode

    def register(self) -> None:
        """Register commands, the cycle shortcut and lifecycle hooks."""
        for mode in MODE_CYCLE:
            self._host.register_command(
                mode.value,
                f"Switch to {mode.value} mode ({MODE_LABELS[mode]})",
                self._command_handler(mode),
            )
        self._host.register_shortcut(
            self._config.cycle_shortcut,
            "Cycle agent mode (ask > plan > build)",
            self.cycle_mode,
        )
        self._host.on("tool_call", self.on_tool_call)
        self._host.on("before_agent_start", self.on_before_agent_start)
        self._host.on("context", self.on_context)
        self._host.on("session_start", self.on_session_start)
        logger.debug(
            "Agent mode extension registered (shortcut=%s, mode=%s)",
            self._config.cycle_shortcut, self.mode.value,
        )

    def _command_handler(self, mode: Mode) -> CommandHandler:
        async def handler(_args: str, ctx: ExtensionContext) -> None:
            await self.set_mode(mode, ctx)
        return handler

    # ── Transitions ───────────────────────────────────────────

    async def cycle_mode(self, ctx: ExtensionContext) -> Mode:
        self._ctx = ctx
        mode = self._state.cycle()
        ctx.ui.notify(f"Mode: {MODE_LABELS[mode]}", "info")
        return mode

    async def set_mode(self, mode: Mode, ctx: ExtensionContext) -> Mode:
        self._ctx = ctx
        self._state.set_mode(mode)
        ctx.ui.notify(f"Mode: {MODE_LABELS[mode]}", "info")
        return mode

    def _apply_mode(self, mode: Mode, *, persist: bool = True) -> None:
        allowed = allowed_tools(mode, self._host.get_all_tools())
        self._host.set_active_tools(allowed)
        logger.debug("Active tools for %s: %s", mode.value, ", ".join(allowed))

        if self._ctx is not None:
            self._ctx.ui.set_status(
                STATUS_KEY, MODE_LABELS[mode], color=MODE_COLORS[mode],
            )
            if persist:
                self._ctx.session_log.append_entry(MODE_ENTRY_TYPE, {"mode": mode.value})
        else:
            logger.debug("No extension context yet; mode %s not persisted", mode.value)

        if self._event_bus is not None:
            self._event_bus.publish_nowait(ModeChanged(
                mode=mode.value,
                label=MODE_LABELS[mode],
                color=MODE_COLORS[mode],
            ))

    # ── Hooks ─────────────────────────────────────────────────

    async def on_tool_call(
        self,
        event: ToolCallEvent | dict[str, Any],
        ctx: ExtensionContext | None = None,
    ) -> BlockResult | None:
        event = as_tool_call_event(event)
        mode, result = self._gate.decide(event)
        if result is not None and self._event_bus is not None:
            self._event_bus.publish_nowait(ToolCallBlocked(
                mode=mode.value, tool_name=event.tool_name, reason=result.reason,
            ))
        return result

    async def on_before_agent_start(
        self,
        event: Any = None,
        ctx: ExtensionContext | None = None,
    ) -> ContextMessage | None:
        return build_context_message(self.mode)

    async def on_context(
        self,
        event: Iterable[Any] | dict[str, Any],
        ctx: ExtensionContext | None = None,
    ) -> list[Any]:
        messages = event.get("messages", []) if isinstance(event, dict) else event
        return strip_mode_context(messages)

    async def on_session_start(
        self,
        event: Any,
        ctx: ExtensionContext,
    ) -> Mode:
        self._ctx = ctx
        mode = self._state.restore(ctx.session_log.get_entries())
        self._apply_mode(mode, persist=False)
        return mode
