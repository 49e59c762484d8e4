"""Rendering of command results to strings.

This module is responsible for:

* Turning a schema + row matrix into a human-readable table (Rich),
  JSON, YAML or CSV.
* The transposed (key/value) view used for single objects.
* The raw dump of complete domain objects, which bypasses the table
  path entirely so the output can be fed back into ``create``/``edit``.

Every public function returns a ``str`` — nothing is printed here.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from typing import Any

import yaml

from metalcloud_cli.core.codec import Naming, device_to_mapping, interface_to_mapping
from metalcloud_cli.core.models import SwitchDevice, SwitchInterface
from metalcloud_cli.core.table import FieldType, OutputFormat, Row, SchemaField
from metalcloud_cli.exceptions import EnvironmentError, ValidationError
from metalcloud_cli.utils.strings import to_lower_camel

# Wide enough that Rich never wraps or truncates a column; the table
# itself only takes the width its cells need.
_RENDER_WIDTH = 1000

_TRANSPOSED_SCHEMA: tuple[SchemaField, ...] = (
    SchemaField("KEY", FieldType.STRING, 6),
    SchemaField("VALUE", FieldType.STRING, 6),
)


def _import_rich() -> tuple[type[Any], type[Any], type[Any], Any]:
    """Import the Rich pieces used for human-readable tables."""
    try:
        from rich import box
        from rich.console import Console
        from rich.table import Table
        from rich.text import Text
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table, Console, Text, box


# ---------------------------------------------------------------------------
# Cell helpers (pure)
# ---------------------------------------------------------------------------

def _cell_text(value: Any) -> str:
    """Render one cell for text-based formats."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _rows_as_dicts(
    schema: Sequence[SchemaField],
    rows: Sequence[Row],
    *,
    camel_keys: bool,
) -> list[dict[str, Any]]:
    keys = [to_lower_camel(f.name) if camel_keys else f.name for f in schema]
    return [dict(zip(keys, row)) for row in rows]


def _transpose(schema: Sequence[SchemaField], row: Row) -> list[list[Any]]:
    return [[field.name, _cell_text(value)] for field, value in zip(schema, row)]


# ---------------------------------------------------------------------------
# Per-format renderers
# ---------------------------------------------------------------------------

def _render_human(
    schema: Sequence[SchemaField],
    rows: Sequence[Row],
    title: str,
    *,
    show_total: bool,
) -> str:
    table_class, console_class, text_class, box = _import_rich()

    # Cells are literal text; a "[" in a label or password is not markup.
    table = table_class(
        title=text_class(title),
        caption=text_class(f"Total: {len(rows)} {title}") if show_total else None,
        box=box.ASCII,
        show_header=True,
        header_style="bold",
    )
    for field in schema:
        table.add_column(
            field.name,
            justify="right" if field.type in (FieldType.INT, FieldType.FLOAT) else "left",
            min_width=field.size,
            no_wrap=True,
        )
    for row in rows:
        table.add_row(*(text_class(_cell_text(value)) for value in row))

    buffer = io.StringIO()
    console = console_class(
        file=buffer,
        width=_RENDER_WIDTH,
        color_system=None,
        force_terminal=False,
        highlight=False,
    )
    console.print(table)
    return buffer.getvalue()


def _render_csv(schema: Sequence[SchemaField], rows: Sequence[Row]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([field.name for field in schema])
    for row in rows:
        writer.writerow([_cell_text(value) for value in row])
    return buffer.getvalue()


def _render_json(data: Any) -> str:
    return json.dumps(data, indent=4) + "\n"


def _render_yaml(data: Any) -> str:
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)


def _render(
    schema: Sequence[SchemaField],
    rows: Sequence[Row],
    title: str,
    fmt: OutputFormat,
    *,
    show_total: bool,
) -> str:
    if fmt is OutputFormat.JSON:
        return _render_json(_rows_as_dicts(schema, rows, camel_keys=False))
    if fmt is OutputFormat.YAML:
        return _render_yaml(_rows_as_dicts(schema, rows, camel_keys=True))
    if fmt is OutputFormat.CSV:
        return _render_csv(schema, rows)
    if fmt is OutputFormat.HUMAN:
        return _render_human(schema, rows, title, show_total=show_total)
    raise ValueError(f"unhandled output format {fmt!r}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_table(
    schema: Sequence[SchemaField],
    rows: Sequence[Row],
    title: str,
    fmt: OutputFormat,
) -> str:
    """Render a multi-row table in *fmt*.

    Rows must already be sorted and have one cell per schema column.
    """
    return _render(schema, rows, title, fmt, show_total=True)


def render_transposed_table(
    schema: Sequence[SchemaField],
    row: Row,
    title: str,
    fmt: OutputFormat,
) -> str:
    """Render a single row as a ``KEY``/``VALUE`` table in *fmt*."""
    return _render(_TRANSPOSED_SCHEMA, _transpose(schema, row), title, fmt, show_total=False)


def should_render_raw(raw: bool, fmt: OutputFormat) -> bool:
    """The raw dump applies only to ``--raw`` with a native data format."""
    return raw and fmt.is_native


def render_raw_object(
    obj: SwitchDevice | Sequence[SwitchInterface],
    fmt: OutputFormat,
) -> str:
    """Dump complete domain object(s) without going through a schema.

    Devices use YAML field names for YAML and API names for JSON, the
    same names ``create``/``edit`` accept, so the dump can be edited and
    re-submitted as is.

    Raises
    ------
    ValidationError
        If *fmt* is not JSON or YAML.
    """
    if not fmt.is_native:
        raise ValidationError(
            f'Raw output is not available in "{fmt.value}" format.',
            hint="Use --format json or --format yaml together with --raw.",
        )

    naming = Naming.YAML if fmt is OutputFormat.YAML else Naming.JSON
    if isinstance(obj, SwitchDevice):
        data: Any = device_to_mapping(obj, naming)
    else:
        data = [interface_to_mapping(interface) for interface in obj]

    if fmt is OutputFormat.YAML:
        return _render_yaml(data)
    return _render_json(data)
