"""Async event bus carrying gate display events to UI consumers.

Producers on the decision and transition paths publish without
waiting (publish_nowait); a full queue drops the event with a log
line rather than stalling a tool call.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any

from modegate.adapters.events import GateEvent, dict_to_event

logger = logging.getLogger(__name__)


class EventBus:
    """Async queue bridging gate events to UI consumers."""

    def __init__(self, maxsize: int = 1000) -> None:
        self._queue: asyncio.Queue[GateEvent] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    def publish_nowait(self, event: GateEvent | dict[str, Any]) -> bool:
        """Queue an event without blocking. Returns False if dropped."""
        if self._closed:
            return False
        if isinstance(event, dict):
            event = dict_to_event(event)
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.error(
                "EventBus queue full, dropping: %s (queue size: %d)",
                event.event_type,
                self._queue.qsize(),
            )
            return False
        return True

    async def emit(self, event: GateEvent) -> None:
        """Queue an event, waiting up to 30s for space."""
        if self._closed:
            return
        try:
            await asyncio.wait_for(self._queue.put(event), timeout=30.0)
        except asyncio.TimeoutError:
            logger.error(
                "EventBus queue blocked for 30s, dropping: %s (queue size: %d)",
                event.event_type,
                self._queue.qsize(),
            )

    def pending(self) -> list[GateEvent]:
        """Drain and return every queued event without waiting."""
        drained: list[GateEvent] = []
        while True:
            try:
                drained.append(self._queue.get_nowait())
            except asyncio.QueueEmpty:
                return drained

    async def consume(self) -> AsyncIterator[GateEvent]:
        """Yield events as they arrive. Stops on close()."""
        while not self._closed:
            try:
                event = await asyncio.wait_for(self._queue.get(), timeout=0.5)
                yield event
            except asyncio.TimeoutError:
                continue
            except asyncio.CancelledError:
                break

    def close(self) -> None:
        """Stop the consumer loop permanently."""
        self._closed = True

    def reset(self) -> None:
        """Drain leftover events and re-open the bus."""
        self.pending()
        self._closed = False
