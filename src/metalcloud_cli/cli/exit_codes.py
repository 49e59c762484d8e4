"""Exit-code constants used by the CLI layer.

Every exit path of ``metalcloud-cli`` maps to one of these values;
scripts wrapping the tool rely on them.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed; its result (possibly empty) was written to stdout."""

GENERAL_ERROR: int = 1
"""A known MetalCloudError was caught and its message shown on stderr."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
