"""CLI application entry point and command routing for metalcloud-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~metalcloud_cli.exceptions.MetalCloudError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages on stderr and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the handlers
  in :mod:`metalcloud_cli.cli.switch_commands` and the infra layer.
* Results go to stdout through :func:`~metalcloud_cli.cli.console.write_result`;
  diagnostics go to stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING

from metalcloud_cli.cli import exit_codes
from metalcloud_cli.cli.console import console, print_error, write_result
from metalcloud_cli.cli.logging_cfg import configure_logging
from metalcloud_cli.exceptions import ConfigurationError, MetalCloudError
from metalcloud_cli.version import __version__

if TYPE_CHECKING:
    from metalcloud_cli.infra.metalcloud_client import MetalCloudClient
    from metalcloud_cli.infra.settings import Settings

logger = logging.getLogger(__name__)

_TABLE_FORMATS = ("json", "yaml", "csv", "text")
_RAW_FORMATS = ("json", "yaml")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_id(parser: argparse.ArgumentParser) -> None:
    # Not argparse-required: a missing --id is reported by the resolver.
    parser.add_argument(
        "--id",
        dest="id",
        metavar="ID_OR_LABEL",
        help="Switch id or identifier string.",
    )


def _add_raw_input(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=_RAW_FORMATS,
        default="json",
        help="Input format of the configuration document (default: json).",
    )
    parser.add_argument(
        "--raw-config",
        dest="raw_config",
        metavar="PATH",
        help="Read the configuration from this file.",
    )
    parser.add_argument(
        "--pipe",
        action="store_true",
        help="Read the configuration from standard input.",
    )
    parser.add_argument(
        "--retrieve-hostname-from-switch",
        dest="retrieve_hostname_from_switch",
        action="store_true",
        help="Ask the switch for its hostname instead of using the given one.",
    )
    parser.add_argument(
        "--return-id",
        dest="return_id",
        action="store_true",
        help="Print the id of the affected switch.",
    )


def _add_output_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=_TABLE_FORMATS,
        default=None,
        help="Output format (default: text).",
    )


def _build_switch_parser(subjects: argparse._SubParsersAction) -> None:
    switch = subjects.add_parser(
        "switch",
        aliases=["sw"],
        help="Manage switch devices (admin only).",
        description="Manage switch devices.",
    )
    switch.set_defaults(subject="switch", predicate=None, _parser=switch)
    predicates = switch.add_subparsers(metavar="<predicate>")

    p = predicates.add_parser("list", aliases=["ls"], help="List switch devices.")
    _add_output_format(p)
    p.add_argument("--datacenter", help="Only switches in this datacenter.")
    p.add_argument(
        "--type",
        "--switch-type",
        dest="switch_type",
        help="Only switches with this provisioner type.",
    )
    p.add_argument(
        "--show-credentials",
        dest="show_credentials",
        action="store_true",
        help="Include management user and password.",
    )
    p.set_defaults(predicate="list")

    p = predicates.add_parser("create", aliases=["new"], help="Create a switch device.")
    _add_raw_input(p)
    p.set_defaults(predicate="create")

    p = predicates.add_parser("edit", aliases=["update"], help="Edit a switch device.")
    _add_id(p)
    _add_raw_input(p)
    p.set_defaults(predicate="edit")

    p = predicates.add_parser("get", aliases=["show"], help="Show a switch device.")
    _add_id(p)
    _add_output_format(p)
    p.add_argument(
        "--raw",
        action="store_true",
        help="Dump the complete object (json/yaml formats only).",
    )
    p.add_argument(
        "--show-credentials",
        dest="show_credentials",
        action="store_true",
        help="Include management user and password.",
    )
    p.set_defaults(predicate="get")

    p = predicates.add_parser("delete", aliases=["rm"], help="Delete a switch device.")
    _add_id(p)
    p.add_argument(
        "--autoconfirm",
        action="store_true",
        help="Do not ask for confirmation.",
    )
    p.set_defaults(predicate="delete")

    p = predicates.add_parser(
        "interfaces",
        aliases=["intf"],
        help="List the interfaces of a switch device.",
    )
    _add_id(p)
    _add_output_format(p)
    p.add_argument(
        "--raw",
        action="store_true",
        help="Dump the complete objects (json/yaml formats only).",
    )
    p.set_defaults(predicate="interfaces")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``metalcloud-cli switch <predicate> [flags]``
    * ``metalcloud-cli doctor``  — configuration diagnostics
    * ``metalcloud-cli --version``
    """
    parser = argparse.ArgumentParser(
        prog="metalcloud-cli",
        description="Metal Cloud command line client.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log API calls and internal steps to stderr.",
    )
    parser.set_defaults(subject=None)

    subjects = parser.add_subparsers(metavar="<subject>")
    _build_switch_parser(subjects)
    doctor = subjects.add_parser("doctor", help="Check the local configuration.")
    doctor.set_defaults(subject="doctor")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _load_settings() -> Settings:
    """Load settings; the switch commands need the developer API."""
    from metalcloud_cli.infra.settings import load_settings

    settings = load_settings()
    if not settings.admin:
        raise ConfigurationError(
            "Switch commands require admin access.",
            hint="Set METALCLOUD_ADMIN=true to use the developer API.",
        )
    return settings


def _build_client(settings: Settings) -> MetalCloudClient:
    from metalcloud_cli.infra.metalcloud_client import MetalCloudClient

    return MetalCloudClient.from_settings(settings)


def _switch_handler(predicate: str) -> Callable[..., str]:
    from metalcloud_cli.cli import switch_commands

    return {
        "list": switch_commands.switch_list,
        "create": switch_commands.switch_create,
        "edit": switch_commands.switch_edit,
        "get": switch_commands.switch_get,
        "delete": switch_commands.switch_delete,
        "interfaces": switch_commands.switch_interfaces,
    }[predicate]


def _handle_switch(args: argparse.Namespace) -> int:
    """Dispatch one ``switch`` predicate and print its result."""
    from metalcloud_cli.core.context import CommandContext

    if args.predicate is None:
        args._parser.print_help()
        return exit_codes.SUCCESS

    settings = _load_settings()
    if settings.logging_enabled:
        configure_logging(verbose=True)

    ctx = CommandContext.from_namespace(args, suppress_prompts=settings.suppress_prompts)

    handler = _switch_handler(args.predicate)
    logger.debug("Running switch %s", args.predicate)

    client = _build_client(settings)
    try:
        output = handler(ctx, client)
    finally:
        client.close()

    write_result(output)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from metalcloud_cli.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the metalcloud-cli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.subject is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.subject == "doctor":
        return _handle_doctor()

    return _handle_switch(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except MetalCloudError as exc:
        print_error(str(exc), exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        print_error(
            f"Unexpected error. Please report this issue.\n  {type(exc).__name__}: {exc}",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
