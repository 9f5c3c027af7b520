from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from modegate.engine.config import GateConfig
from modegate.engine.errors import ConfigError, InvalidModeError
from modegate.engine.models import Mode
from modegate.engine.yaml_config import load_yaml_config

ENV_VARS = (
    "MODEGATE_DEFAULT_MODE",
    "MODEGATE_PREVIEW_LENGTH",
    "MODEGATE_CYCLE_SHORTCUT",
    "MODEGATE_SESSION_LOG",
    "MODEGATE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    cfg = GateConfig()
    assert cfg.default_mode is Mode.BUILD
    assert cfg.preview_length == 60
    assert cfg.cycle_shortcut == "f2"
    assert cfg.session_log_path is None


def test_from_env_without_overrides_matches_defaults() -> None:
    assert GateConfig.from_env() == GateConfig()


def test_from_env_reads_overrides(monkeypatch) -> None:
    monkeypatch.setenv("MODEGATE_DEFAULT_MODE", "Plan")
    monkeypatch.setenv("MODEGATE_PREVIEW_LENGTH", "20")
    monkeypatch.setenv("MODEGATE_CYCLE_SHORTCUT", "ctrl+m")
    monkeypatch.setenv("MODEGATE_SESSION_LOG", "/tmp/session.jsonl")
    monkeypatch.setenv("MODEGATE_LOG_LEVEL", "DEBUG")
    cfg = GateConfig.from_env()
    assert cfg.default_mode is Mode.PLAN
    assert cfg.preview_length == 20
    assert cfg.cycle_shortcut == "ctrl+m"
    assert cfg.session_log_path == "/tmp/session.jsonl"
    assert cfg.log_level == "DEBUG"


def test_from_env_rejects_unknown_mode(monkeypatch) -> None:
    monkeypatch.setenv("MODEGATE_DEFAULT_MODE", "chaos")
    with pytest.raises(InvalidModeError):
        GateConfig.from_env()


def test_yaml_config_loads_gate_section(tmp_path: Path) -> None:
    config_path = tmp_path / "modegate.yaml"
    config_path.write_text(
        "gate:\n"
        "  default_mode: ask\n"
        "  preview_length: 80\n"
        "  session_log_path: ~/modegate/session.jsonl\n"
    )
    cfg = load_yaml_config(config_path)
    assert cfg.default_mode is Mode.ASK
    assert cfg.preview_length == 80
    assert cfg.cycle_shortcut == "f2"
    assert cfg.session_log_path == str(Path("~/modegate/session.jsonl").expanduser())


def test_yaml_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")
    assert load_yaml_config(config_path) == GateConfig()


def test_yaml_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_yaml_config(tmp_path / "nope.yaml")


def test_yaml_config_parse_error_propagates(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("gate: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        load_yaml_config(config_path)


@pytest.mark.parametrize("body", [
    "- just\n- a list\n",
    "gate: not-a-mapping\n",
    "gate:\n  preview_length: lots\n",
])
def test_yaml_config_rejects_malformed_values(tmp_path: Path, body: str) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text(body)
    with pytest.raises(ConfigError):
        load_yaml_config(config_path)


def test_yaml_config_unknown_mode(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("gate:\n  default_mode: yolo\n")
    with pytest.raises(InvalidModeError):
        load_yaml_config(config_path)


@pytest.mark.parametrize("length", [0, -5])
def test_preview_length_below_one_is_rejected(length: int) -> None:
    with pytest.raises(ConfigError) as exc_info:
        GateConfig(preview_length=length)
    assert "preview_length must be at least 1" in exc_info.value.reason


def test_from_env_rejects_non_positive_preview_length(monkeypatch) -> None:
    monkeypatch.setenv("MODEGATE_PREVIEW_LENGTH", "0")
    with pytest.raises(ConfigError) as exc_info:
        GateConfig.from_env()
    assert exc_info.value.source == "environment"


def test_yaml_config_rejects_negative_preview_length(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("gate:\n  preview_length: -5\n")
    with pytest.raises(ConfigError) as exc_info:
        load_yaml_config(config_path)
    assert exc_info.value.source == str(config_path)
