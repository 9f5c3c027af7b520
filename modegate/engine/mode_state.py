"""Process-wide current mode, owned by a single lock-guarded cell.

Transitions (cycle / set_mode / restore) and gate reads all go through
the same lock, so a gate decision never sees a mode that is being
replaced. Listeners carry the slow side effects (registry update,
status, session log) and run outside that lock, but a second
transition lock is held across the mutation and its listeners so the
side effects of overlapping transitions land in mutation order.
Listeners must not start a transition themselves.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from .lifecycle import allowed_tools, coerce_mode, next_mode
from .models import Mode, SessionEntry

logger = logging.getLogger(__name__)

MODE_ENTRY_TYPE = "agent-mode"

ModeListener = Callable[[Mode], None]


class ModeState:
    """Holds the active mode and applies transitions."""

    def __init__(self, initial: Mode = Mode.BUILD) -> None:
        self._mode = initial
        self._default = initial
        self._lock = threading.RLock()
        self._transition_lock = threading.Lock()
        self._listeners: list[ModeListener] = []
        self._restored = False

    @property
    def mode(self) -> Mode:
        with self._lock:
            return self._mode

    @contextmanager
    def locked(self) -> Iterator[Mode]:
        """Hold the mode steady for the duration of a decision."""
        with self._lock:
            yield self._mode

    def add_listener(self, listener: ModeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ModeListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def cycle(self) -> Mode:
        """Advance ask -> plan -> build -> ask."""
        with self._transition_lock:
            with self._lock:
                old = self._mode
                self._mode = next_mode(old)
                new = self._mode
            logger.info("Mode cycled: %s -> %s", old.value, new.value)
            self._notify(new)
        return new

    def set_mode(self, target: Mode) -> Mode:
        """Set the mode directly. Callers validate with parse_mode first."""
        with self._transition_lock:
            with self._lock:
                old = self._mode
                self._mode = target
            logger.info("Mode set: %s -> %s", old.value, target.value)
            self._notify(target)
        return target

    def active_tool_set(self, all_tools: list[str]) -> list[str]:
        with self._lock:
            mode = self._mode
        return allowed_tools(mode, all_tools)

    def restore(self, entries: Iterable[SessionEntry | dict[str, Any]]) -> Mode:
        """Adopt the most recent persisted mode record, once per session.

        Missing or unrecognized values keep the default mode. Listeners
        are not notified; the caller applies the restored mode itself.
        """
        last_value: object = None
        for entry in entries:
            if isinstance(entry, dict):
                entry = SessionEntry.from_dict(entry)
            if entry.type == "custom" and entry.custom_type == MODE_ENTRY_TYPE:
                last_value = entry.data.get("mode")

        with self._transition_lock, self._lock:
            if self._restored:
                logger.debug("Mode already restored this session; ignoring")
                return self._mode
            self._restored = True
            if last_value is not None:
                self._mode = coerce_mode(last_value, self._default)
            mode = self._mode
        logger.info("Mode restored from session log: %s (stored=%r)", mode.value, last_value)
        return mode

    def _notify(self, mode: Mode) -> None:
        for listener in list(self._listeners):
            listener(mode)
