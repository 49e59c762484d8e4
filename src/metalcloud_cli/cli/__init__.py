"""CLI layer — argument parsing, switch command handlers, rendering,
confirmation prompts, and the error boundary.

This package is the outermost layer of the application.  It may import
from ``core``, ``infra``, and ``utils``, but no other layer may import
from ``cli``.
"""
