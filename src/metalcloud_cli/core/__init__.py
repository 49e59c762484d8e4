"""Core layer — pure domain logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from metalcloud_cli.core.context import CommandContext
from metalcloud_cli.core.models import SwitchDevice, SwitchInterface
from metalcloud_cli.core.protocols import SwitchClient
from metalcloud_cli.core.resolver import ById, ByLabel, classify_token, resolve_switch
from metalcloud_cli.core.table import FieldType, OutputFormat, SchemaField, sort_rows

__all__: list[str] = [
    "ById",
    "ByLabel",
    "CommandContext",
    "FieldType",
    "OutputFormat",
    "SchemaField",
    "SwitchClient",
    "SwitchDevice",
    "SwitchInterface",
    "classify_token",
    "resolve_switch",
    "sort_rows",
]
