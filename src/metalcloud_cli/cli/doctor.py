"""``metalcloud-cli doctor`` — configuration diagnostics command.

Checks the interpreter and the ``METALCLOUD_*`` environment without
contacting the API, and renders a Rich table summarising whether the
switch commands can run.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No API call is made here.
"""

from __future__ import annotations

import os
import platform
import sys

from metalcloud_cli.cli import exit_codes
from metalcloud_cli.cli.console import console
from metalcloud_cli.infra.settings import API_KEY_PATTERN, DEVELOPER_ENDPOINT_SUFFIX
from metalcloud_cli.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _env(name: str) -> str:
    return os.environ.get(f"METALCLOUD_{name}", "").strip()


def _tool_version_check() -> tuple[str, str, str]:
    return "metalcloud-cli", __version__, _OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _endpoint_check() -> tuple[str, str, str]:
    endpoint = _env("ENDPOINT")
    if not endpoint:
        return "Endpoint", "not set", _FAIL
    return "Endpoint", endpoint.rstrip("/") + DEVELOPER_ENDPOINT_SUFFIX, _OK


def _user_email_check() -> tuple[str, str, str]:
    email = _env("USER_EMAIL")
    if not email:
        return "User", "not set", _FAIL
    return "User", email, _OK


def mask_api_key(api_key: str) -> str:
    """Keep the key id, hide the secret: ``12:AbCd`` → ``12:****``."""
    key_id, sep, secret = api_key.partition(":")
    if not sep:
        return "*" * min(len(api_key), 8)
    return f"{key_id}:{'*' * min(len(secret), 8)}"


def _api_key_check() -> tuple[str, str, str]:
    api_key = _env("API_KEY")
    if not api_key:
        return "API key", "not set", _FAIL
    if not API_KEY_PATTERN.match(api_key):
        return "API key", f"{mask_api_key(api_key)} (expected <id>:<chars>)", _FAIL
    return "API key", mask_api_key(api_key), _OK


def _admin_check() -> tuple[str, str, str]:
    if _env("ADMIN").lower() in _TRUE_VALUES:
        return "Admin", "enabled", _OK
    # Switch commands need the developer API.
    return "Admin", "disabled (set METALCLOUD_ADMIN=true)", _WARN


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nmetalcloud-cli doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<38} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<38} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def collect_checks() -> list[tuple[str, str, str]]:
    return [
        _tool_version_check(),
        _python_version_check(),
        _endpoint_check(),
        _user_email_check(),
        _api_key_check(),
        _admin_check(),
    ]


def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Warnings do not fail.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="metalcloud-cli doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
