"""Append-only session log of typed records.

The mode gate consumes only two operations: append a record and read
all records in time order. Storage backends:

- InMemorySessionLog: process-local list, for embedding and tests.
- JsonlSessionLog: one JSON object per line in a file.
"""
from __future__ import annotations

import abc
import json
import logging
import threading
from pathlib import Path
from typing import Any

from modegate.engine.config import GateConfig
from modegate.engine.models import SessionEntry

logger = logging.getLogger(__name__)


class SessionLog(abc.ABC):
    """Read/append interface to the host's session storage."""

    @abc.abstractmethod
    def append_entry(self, custom_type: str, data: dict[str, Any]) -> SessionEntry:
        """Append a custom record and return it."""

    @abc.abstractmethod
    def get_entries(self) -> list[SessionEntry]:
        """All records, oldest first."""


class InMemorySessionLog(SessionLog):
    """Session log kept in process memory."""

    def __init__(self, entries: list[SessionEntry] | None = None) -> None:
        self._entries: list[SessionEntry] = list(entries or [])
        self._lock = threading.Lock()

    def append_entry(self, custom_type: str, data: dict[str, Any]) -> SessionEntry:
        entry = SessionEntry(custom_type=custom_type, data=dict(data))
        with self._lock:
            self._entries.append(entry)
        return entry

    def get_entries(self) -> list[SessionEntry]:
        with self._lock:
            return list(self._entries)


class JsonlSessionLog(SessionLog):
    """Session log stored as newline-delimited JSON."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def append_entry(self, custom_type: str, data: dict[str, Any]) -> SessionEntry:
        entry = SessionEntry(custom_type=custom_type, data=dict(data))
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        logger.debug("Appended %s entry to %s", custom_type, self._path)
        return entry

    def get_entries(self) -> list[SessionEntry]:
        if not self._path.exists():
            return []
        entries: list[SessionEntry] = []
        with self._lock:
            text = self._path.read_text(encoding="utf-8")
        for lineno, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                raw = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("Skipping corrupt session log line %d in %s", lineno, self._path)
                continue
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object session log line %d in %s", lineno, self._path)
                continue
            entries.append(SessionEntry.from_dict(raw))
        return entries


def open_session_log(config: GateConfig) -> SessionLog:
    """JSONL log at ``config.session_log_path``, or in-memory when unset."""
    if config.session_log_path:
        logger.info("Using JSONL session log at %s", config.session_log_path)
        return JsonlSessionLog(config.session_log_path)
    return InMemorySessionLog()
