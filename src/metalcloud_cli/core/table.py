"""Table primitives shared by every listing command.

* :class:`SchemaField` — one column descriptor (name, type, width hint).
* :class:`OutputFormat` — closed set of output formats.
* :func:`sort_rows` — stable multi-column sort driven by the schema.

Everything here is pure; the string rendering itself lives in
:mod:`metalcloud_cli.cli.render`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from metalcloud_cli.exceptions import ValidationError

Row = Sequence[Any]


class FieldType(Enum):
    """Primitive type of a column's cells."""

    INT = "int"
    STRING = "string"
    FLOAT = "float"
    BOOL = "bool"


@dataclass(frozen=True, slots=True)
class SchemaField:
    """A single column of a rendered table."""

    name: str
    type: FieldType = FieldType.STRING
    size: int = 5
    """Minimum display width hint for the human-readable table."""


class OutputFormat(Enum):
    """Output formats accepted by ``--format``."""

    HUMAN = "text"
    JSON = "json"
    YAML = "yaml"
    CSV = "csv"

    @classmethod
    def parse(cls, text: str | None) -> OutputFormat:
        """Map a ``--format`` value to a member.

        ``None`` and ``""`` select the human-readable table; names are
        case-insensitive.

        Raises
        ------
        ValidationError
            For any other value.
        """
        if not text:
            return cls.HUMAN
        try:
            return cls(text.lower())
        except ValueError:
            raise ValidationError(
                f'Output format "{text}" is not supported.',
                hint="Supported values are 'json', 'yaml', 'csv' and 'text'.",
            ) from None

    @property
    def is_native(self) -> bool:
        """True for data serialisation formats (JSON, YAML)."""
        return self in (OutputFormat.JSON, OutputFormat.YAML)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

_ZERO: dict[FieldType, Any] = {
    FieldType.INT: 0,
    FieldType.STRING: "",
    FieldType.FLOAT: 0.0,
    FieldType.BOOL: False,
}


def _column_index(schema: Sequence[SchemaField], name: str) -> int:
    for index, column in enumerate(schema):
        if column.name == name:
            return index
    raise ValueError(f"could not find field with name {name}")


def sort_rows(
    schema: Sequence[SchemaField],
    rows: Sequence[Row],
    *names: str,
) -> list[Row]:
    """Return *rows* sorted by the columns *names*, in priority order.

    The sort is stable; cells that are ``None`` compare as the zero
    value of their column type.

    Raises
    ------
    ValueError
        If a name does not appear in *schema* (a programming error).
    """
    keys = [(i, _ZERO[schema[i].type]) for i in (_column_index(schema, n) for n in names)]

    def _key(row: Row) -> tuple[Any, ...]:
        return tuple(zero if row[i] is None else row[i] for i, zero in keys)

    return sorted(rows, key=_key)
