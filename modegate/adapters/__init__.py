"""Adapters package - Bridge between the mode gate and agent hosts.

This package contains the host interfaces, the agent mode extension
that registers hooks on a host, and the event bus feeding UI consumers.
"""
from __future__ import annotations

__all__ = [
    "AgentModeExtension",
    "EventBus",
    "ExtensionContext",
    "ExtensionHost",
    "UIContext",
]

from modegate.adapters.event_bus import EventBus
from modegate.adapters.extension import AgentModeExtension
from modegate.adapters.host import ExtensionContext, ExtensionHost, UIContext
