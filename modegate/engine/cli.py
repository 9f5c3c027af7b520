"""CLI entry point for the mode gate.

Usage:
    modegate check "git push origin main"
    modegate check --mode plan --tool write --path notes.md
    modegate explain "FOO=1 timeout 5 rm -rf x | tee log"
"""
from __future__ import annotations

import argparse
import logging
import sys

from .command_policy import check_shell_escape, explain_command
from .config import GateConfig
from .errors import ConfigError, ModeGateError
from .gate import BASH_TOOL, ToolCallGate
from .lifecycle import MODE_CYCLE, parse_mode
from .mode_state import ModeState
from .models import ToolCallEvent

EXIT_ALLOWED = 0
EXIT_BLOCKED = 2
EXIT_USAGE = 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modegate",
        description="Check agent tool calls against ask/plan/build modes",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config file (default: MODEGATE_* env vars)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="subcommand", required=True)

    check = sub.add_parser("check", help="Evaluate one tool call")
    check.add_argument(
        "command",
        nargs="?",
        default="",
        help="Shell command (for the bash tool)",
    )
    check.add_argument(
        "--mode",
        default="ask",
        choices=[m.value for m in MODE_CYCLE],
        help="Mode to evaluate under (default: ask)",
    )
    check.add_argument(
        "--tool",
        default=BASH_TOOL,
        help="Tool name (default: bash)",
    )
    check.add_argument(
        "--path",
        default="",
        help="Target path for edit/write",
    )

    explain = sub.add_parser("explain", help="Show segments and verdicts")
    explain.add_argument("command", help="Shell command to break down")
    return parser


def _load_config(path: str | None) -> GateConfig:
    if path:
        import yaml

        from .yaml_config import load_yaml_config
        try:
            return load_yaml_config(path)
        except yaml.YAMLError as exc:
            raise ConfigError(path, str(exc)) from exc
    return GateConfig.from_env()


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = _load_config(args.config)
        if not args.verbose:
            logging.getLogger("modegate").setLevel(config.log_level.upper())
    except (ModeGateError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    if args.subcommand == "explain":
        return _explain(args.command, config)
    return _check(args, config)


def _check(args: argparse.Namespace, config: GateConfig) -> int:
    state = ModeState(parse_mode(args.mode))
    gate = ToolCallGate(state, preview_length=config.preview_length)
    event = ToolCallEvent(
        tool_name=args.tool,
        input={"command": args.command, "path": args.path},
    )
    result = gate.evaluate(event)
    if result is None:
        print("allowed")
        return EXIT_ALLOWED
    print(f"blocked: {result.reason}")
    return EXIT_BLOCKED


def _explain(command: str, config: GateConfig) -> int:
    escape = check_shell_escape(command)
    if escape.blocked:
        print(f"shell escape: blocked: {escape.reason}")

    reports = explain_command(command, preview_length=config.preview_length)
    if not reports:
        print("(no segments)")
        return EXIT_BLOCKED if escape.blocked else EXIT_ALLOWED

    blocked = escape.blocked
    for i, report in enumerate(reports, start=1):
        status = "allowed" if report.verdict.allowed else f"blocked: {report.verdict.reason}"
        print(f"[{i}] {report.segment}")
        print(f"    command={report.normalized.command!r} rest={report.normalized.rest!r}")
        print(f"    {status}")
        blocked = blocked or report.verdict.blocked
    return EXIT_BLOCKED if blocked else EXIT_ALLOWED


if __name__ == "__main__":
    sys.exit(main())
