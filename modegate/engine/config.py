"""Configuration loaded from environment variables.

All settings have sensible defaults. Override via MODEGATE_* env vars.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import ConfigError
from .lifecycle import parse_mode
from .models import Mode

logger = logging.getLogger(__name__)


@dataclass
class GateConfig:
    """Mode gate configuration."""

    # Mode used when the session log holds no valid record.
    default_mode: Mode = Mode.BUILD

    # Max characters of the offending command quoted in a block reason.
    preview_length: int = 60

    # Key that cycles ask -> plan -> build.
    cycle_shortcut: str = "f2"

    # Optional JSONL session log path. None keeps the log in memory.
    session_log_path: str | None = None

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.preview_length < 1:
            raise ConfigError(
                "GateConfig",
                f"preview_length must be at least 1, got {self.preview_length}",
            )

    @classmethod
    def from_env(cls) -> GateConfig:
        """Load configuration from MODEGATE_* environment variables."""
        gate_vars = {
            k: v for k, v in os.environ.items() if k.startswith("MODEGATE_")
        }
        if gate_vars:
            logger.info(
                "GateConfig.from_env: MODEGATE_* env overrides: %s",
                ", ".join(f"{k}={v}" for k, v in sorted(gate_vars.items())),
            )
        else:
            logger.debug("GateConfig.from_env: no MODEGATE_* env vars set, using defaults")

        try:
            config = cls(
                default_mode=parse_mode(os.getenv(
                    "MODEGATE_DEFAULT_MODE", cls.default_mode.value
                )),
                preview_length=int(os.getenv(
                    "MODEGATE_PREVIEW_LENGTH", str(cls.preview_length)
                )),
                cycle_shortcut=os.getenv(
                    "MODEGATE_CYCLE_SHORTCUT", cls.cycle_shortcut
                ),
                session_log_path=os.getenv("MODEGATE_SESSION_LOG") or None,
                log_level=os.getenv("MODEGATE_LOG_LEVEL", cls.log_level),
            )
        except ConfigError as exc:
            raise ConfigError("environment", exc.reason) from exc
        logger.info(
            "GateConfig.from_env: default_mode=%s preview_length=%d log_level=%s",
            config.default_mode.value, config.preview_length, config.log_level,
        )
        return config
