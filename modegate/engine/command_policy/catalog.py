"""Declarative rule tables for the bash mutation classifier.

Every table here is plain data evaluated generically by classifier.py
and normalizer.py. Blocking a new command means adding a row, not a
branch.

The catalog targets known mutation vectors. Commands that match no
rule are allowed: jq filters, awk, SQL comparisons, ``python -c`` and
unknown tools all pass.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CommandRule:
    """A mutating-command pattern, tested against ``"<command> <rest>"``."""
    pattern: re.Pattern[str]
    category: str


@dataclass(frozen=True)
class EscapeRule:
    """A construct that can run an arbitrary nested string."""
    pattern: re.Pattern[str]
    label: str


@dataclass(frozen=True)
class WrapperSpec:
    """A timing/priority wrapper stripped before the real command.

    ``value_flags`` consume the following token. ``takes_duration``
    consumes one leading positional that looks like a duration.
    """
    value_flags: frozenset[str] = field(default_factory=frozenset)
    takes_duration: bool = False


def _rules(category: str, *patterns: str) -> list[CommandRule]:
    return [CommandRule(re.compile(p), category) for p in patterns]


MUTATING_COMMANDS: tuple[CommandRule, ...] = (
    *_rules(
        "filesystem",
        r"^rm\b", r"^mv\b", r"^cp\b", r"^mkdir\b", r"^rmdir\b", r"^touch\b",
        r"^chmod\b", r"^chown\b", r"^chgrp\b", r"^ln\b",
        r"^install\b",  # coreutils install
    ),
    # Interactive, but scripted use would still write.
    *_rules("editor", r"^nano\b", r"^vi\b", r"^vim\b", r"^emacs\b"),
    *_rules(
        "git",
        r"^git\s+(add|commit|push|merge|rebase|reset|checkout\s+-b|switch\s+-c"
        r"|branch\s+-[dDmM]|stash(?!\s+list|\s+show)|cherry-pick|revert"
        r"|tag\s+(?!-l\b|--list\b)\S+|clean|gc|am|format-patch)\b",
    ),
    *_rules(
        "package-manager",
        r"^npm\s+(install|uninstall|update|publish|init|link|ci|pkg)\b",
        r"^npx\b",
        r"^yarn\s+(add|remove|install)\b",
        r"^pnpm\s+(add|remove|install)\b",
        r"^pip\s+(install|uninstall)\b",
        r"^uv\s+(add|remove|sync|lock|pip\s+install|pip\s+uninstall)\b",
        r"^cargo\s+(install|build|run|publish|add|remove)\b",
        r"^go\s+(install|build|run|get)\b",
    ),
    *_rules(
        "process",
        r"^kill\b", r"^pkill\b", r"^killall\b",
        r"^nohup\b", r"^disown\b",
        r"^sudo\b",
    ),
    *_rules(
        "container",
        r"^docker\s+(run|rm|stop|kill|build|push|pull|exec|create|compose)\b",
        r"^docker-compose\b",
        r"^podman\s+(run|rm|stop|kill|build|push|pull|exec|create)\b",
    ),
    *_rules(
        "service",
        r"^systemctl\s+(start|stop|restart|enable|disable|mask|unmask|daemon-reload)\b",
        r"^service\s+\S+\s+(start|stop|restart)\b",
    ),
    *_rules("disk", r"^dd\b", r"^mkfs\b", r"^fdisk\b", r"^parted\b"),
    *_rules("firewall", r"^iptables\b", r"^ufw\b"),
    *_rules("scheduler", r"^crontab\s+-[er]\b"),
    *_rules("in-place-edit", r"^sed\s.*-i\b", r"^sed\s+-i\b"),
    *_rules("file-write", r"^tee\b"),
)

SHELL_ESCAPE_PATTERNS: tuple[EscapeRule, ...] = (
    EscapeRule(re.compile(r"\beval\b"), "eval"),
    EscapeRule(re.compile(r"\bexec\s"), "exec"),
    EscapeRule(re.compile(r"\bbash\s+-c\b"), "bash -c"),
    EscapeRule(re.compile(r"\bsh\s+-c\b"), "sh -c"),
    EscapeRule(re.compile(r"\bzsh\s+-c\b"), "zsh -c"),
)

MUTATING_SQL_KEYWORDS: tuple[str, ...] = (
    "INSERT", "UPDATE", "DELETE", "DROP", "CREATE", "ALTER", "TRUNCATE", "REPLACE",
)
MUTATING_SQL_RE = re.compile(
    r"\b(" + "|".join(MUTATING_SQL_KEYWORDS) + r")\b", re.IGNORECASE,
)
SQL_CLIENTS: frozenset[str] = frozenset({"sqlite3"})

# Running a named file is blocked, inline flags such as -c / -e are not.
SCRIPT_INTERPRETERS: frozenset[str] = frozenset({"python", "python3", "node"})

WRAPPER_COMMANDS: dict[str, WrapperSpec] = {
    "time": WrapperSpec(value_flags=frozenset({"-f", "-o"})),
    "timeout": WrapperSpec(
        value_flags=frozenset({"-s", "-k"}), takes_duration=True,
    ),
    "nice": WrapperSpec(value_flags=frozenset({"-n"})),
    "ionice": WrapperSpec(value_flags=frozenset({"-c", "-n", "-p", "-P", "-u"})),
}

DURATION_RE = re.compile(r"^\d+(?:\.\d+)?[smhd]?$")

# Quoted literals are blanked before redirect detection.
DOUBLE_QUOTED_RE = re.compile(r'"(?:[^"\\]|\\.)*"')
SINGLE_QUOTED_RE = re.compile(r"'[^']*'")
# > or >> after start or whitespace, excluding >=, >& and >>>.
FILE_REDIRECT_RE = re.compile(r"(?:^|\s)>{1,2}\s*(?![>=&\s])")

DEFAULT_PREVIEW_LENGTH = 60
