"""YAML configuration loader.

Example YAML:
    gate:
      default_mode: ask
      preview_length: 80
      cycle_shortcut: f2
      session_log_path: ~/.modegate/session.jsonl
      log_level: DEBUG

Missing keys keep the GateConfig defaults.
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import GateConfig
from .errors import ConfigError, InvalidModeError
from .lifecycle import parse_mode

logger = logging.getLogger(__name__)


def load_yaml_config(path: str | Path) -> GateConfig:
    """Load and parse a YAML config file into a GateConfig."""
    path = Path(path)
    logger.info(
        "load_yaml_config: attempting to load config from %s (exists=%s)",
        path, path.exists()
    )
    try:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error(
            "load_yaml_config: config file not found at %s (absolute path: %s)",
            path, path.absolute()
        )
        raise
    except yaml.YAMLError as exc:
        logger.error("load_yaml_config: YAML parse error in %s: %s", path, exc)
        raise

    if not isinstance(raw, dict):
        raise ConfigError(str(path), "top level must be a mapping")

    gate_raw = raw.get("gate", {}) or {}
    if not isinstance(gate_raw, dict):
        raise ConfigError(str(path), "'gate' section must be a mapping")

    session_log_path = gate_raw.get(
        "session_log_path", GateConfig.session_log_path
    )
    if session_log_path:
        session_log_path = str(Path(str(session_log_path)).expanduser())

    try:
        config = GateConfig(
            default_mode=parse_mode(gate_raw.get(
                "default_mode", GateConfig.default_mode.value
            )),
            preview_length=int(gate_raw.get(
                "preview_length", GateConfig.preview_length
            )),
            cycle_shortcut=str(gate_raw.get(
                "cycle_shortcut", GateConfig.cycle_shortcut
            )),
            session_log_path=session_log_path or None,
            log_level=str(gate_raw.get("log_level", GateConfig.log_level)),
        )
    except InvalidModeError:
        raise
    except ConfigError as exc:
        raise ConfigError(str(path), exc.reason) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(str(path), str(exc)) from exc

    logger.info(
        "Parsed YAML config %s: default_mode=%s preview_length=%d",
        path.name, config.default_mode.value, config.preview_length,
    )
    return config
