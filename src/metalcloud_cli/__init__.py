"""metalcloud-cli — switch device management for Metal Cloud.

A thin command-line layer over the Metal Cloud developer API with a
strict cli / core / infra split.
"""

from metalcloud_cli.version import __version__

__all__: list[str] = ["__version__"]
