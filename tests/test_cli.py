from __future__ import annotations

from pathlib import Path

import pytest

from modegate.engine.cli import EXIT_ALLOWED, EXIT_BLOCKED, EXIT_USAGE, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in ("MODEGATE_DEFAULT_MODE", "MODEGATE_PREVIEW_LENGTH", "MODEGATE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_check_allows_read_only_command(capsys) -> None:
    assert main(["check", "git status"]) == EXIT_ALLOWED
    assert capsys.readouterr().out.strip() == "allowed"


def test_check_blocks_mutating_command(capsys) -> None:
    assert main(["check", "git push origin main"]) == EXIT_BLOCKED
    out = capsys.readouterr().out
    assert out.startswith("blocked: ")
    assert '"git push origin main" is a mutating command' in out


def test_check_build_mode_allows_everything() -> None:
    assert main(["check", "--mode", "build", "rm -rf /"]) == EXIT_ALLOWED


def test_check_file_tool_in_plan_mode() -> None:
    assert main(["check", "--mode", "plan", "--tool", "write", "--path", "a.md"]) == EXIT_ALLOWED
    assert main(["check", "--mode", "plan", "--tool", "write", "--path", "a.py"]) == EXIT_BLOCKED


def test_check_unknown_mode_is_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["check", "--mode", "chaos", "ls"])
    assert exc_info.value.code == 2


def test_preview_length_from_env(monkeypatch, capsys) -> None:
    monkeypatch.setenv("MODEGATE_PREVIEW_LENGTH", "5")
    assert main(["check", "rm -rf everything"]) == EXIT_BLOCKED
    assert '"rm -r" is a mutating command' in capsys.readouterr().out


def test_yaml_config_is_used(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "modegate.yaml"
    config_path.write_text("gate:\n  preview_length: 4\n")
    assert main(["--config", str(config_path), "check", "touch file"]) == EXIT_BLOCKED
    assert '"touc" is a mutating command' in capsys.readouterr().out


def test_bad_config_returns_usage_exit(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("gate: [unclosed\n")
    assert main(["--config", str(config_path), "check", "ls"]) == EXIT_USAGE
    assert capsys.readouterr().err.startswith("Error: ")


def test_missing_config_returns_usage_exit(tmp_path: Path) -> None:
    assert main(["--config", str(tmp_path / "nope.yaml"), "check", "ls"]) == EXIT_USAGE


def test_explain_lists_segments(capsys) -> None:
    assert main(["explain", "ls && FOO=1 rm x"]) == EXIT_BLOCKED
    out = capsys.readouterr().out
    assert "[1] ls" in out
    assert "[2] FOO=1 rm x" in out
    assert "command='rm' rest='x'" in out


def test_explain_reports_shell_escape(capsys) -> None:
    assert main(["explain", "eval foo"]) == EXIT_BLOCKED
    assert "shell escape: blocked: eval can execute arbitrary code" in capsys.readouterr().out


def test_explain_read_only_command() -> None:
    assert main(["explain", "cat a | wc -l"]) == EXIT_ALLOWED


def test_zero_preview_length_is_usage_error(monkeypatch, capsys) -> None:
    monkeypatch.setenv("MODEGATE_PREVIEW_LENGTH", "0")
    assert main(["check", "rm x"]) == EXIT_USAGE
    assert "preview_length must be at least 1" in capsys.readouterr().err
