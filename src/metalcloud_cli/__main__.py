"""Allow ``python -m metalcloud_cli`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m metalcloud_cli`` behaves identically to the
``metalcloud-cli`` console script.
"""

from __future__ import annotations

from metalcloud_cli.cli.app import cli

if __name__ == "__main__":
    cli()
