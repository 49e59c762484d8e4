"""String helpers used when flattening API values into table cells."""

from __future__ import annotations

import re
from collections.abc import Iterable

_WORD_SPLIT_RE = re.compile(r"[\s_\-]+")


def flatten_and_join(groups: Iterable[Iterable[str]]) -> str:
    """Join a list of string lists into one comma-separated string.

    >>> flatten_and_join([["10.0.0.1", "10.0.0.2"], ["fd00::1"]])
    '10.0.0.1, 10.0.0.2, fd00::1'
    """
    return ", ".join(", ".join(group) for group in groups)


def to_lower_camel(name: str) -> str:
    """Convert a column title to a lowerCamel key (``"MGMT IP"`` → ``"mgmtIp"``)."""
    words = [w for w in _WORD_SPLIT_RE.split(name.strip().lower()) if w]
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])
