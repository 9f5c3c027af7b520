"""Abstract interfaces the agent host provides to the mode extension.

The host owns tool registration, command/shortcut dispatch, the UI,
and session storage. The extension only calls the methods below.
"""
from __future__ import annotations

import abc
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from modegate.shared.services.session_log import SessionLog

# Signature: async def handler(args, ctx) -> None
CommandHandler = Callable[[str, "ExtensionContext"], Awaitable[None]]
# Signature: async def handler(ctx) -> None
ShortcutHandler = Callable[["ExtensionContext"], Awaitable[None]]
# Hook handlers receive the event payload and the context.
EventHandler = Callable[[Any, "ExtensionContext"], Awaitable[Any]]


class UIContext(abc.ABC):
    """Status line and notifications."""

    @abc.abstractmethod
    def set_status(self, key: str, text: str, *, color: str | None = None) -> None:
        """Set a keyed status indicator."""

    @abc.abstractmethod
    def notify(self, message: str, level: str = "info") -> None:
        """Show a transient notification."""


@dataclass
class ExtensionContext:
    """Per-call context handed to command, shortcut and hook handlers."""
    ui: UIContext
    session_log: SessionLog


class ExtensionHost(abc.ABC):
    """Tool registry and dispatch surface of the agent host."""

    @abc.abstractmethod
    def get_all_tools(self) -> list[str]:
        """Names of every currently registered tool."""

    @abc.abstractmethod
    def set_active_tools(self, names: list[str]) -> None:
        """Restrict the agent to *names* for subsequent turns."""

    @abc.abstractmethod
    def register_command(
        self, name: str, description: str, handler: CommandHandler,
    ) -> None:
        """Register a slash command."""

    @abc.abstractmethod
    def register_shortcut(
        self, key: str, description: str, handler: ShortcutHandler,
    ) -> None:
        """Register a keyboard shortcut."""

    @abc.abstractmethod
    def on(self, event_name: str, handler: EventHandler) -> None:
        """Subscribe to a host lifecycle event.

        Event names used by the mode extension: ``tool_call``,
        ``before_agent_start``, ``context``, ``session_start``.
        """
