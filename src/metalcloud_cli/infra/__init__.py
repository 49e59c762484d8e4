"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Metal Cloud API and the
process environment.  Every raw third-party exception must be caught
here and re-raised as a :class:`~metalcloud_cli.exceptions.MetalCloudError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from metalcloud_cli.infra.metalcloud_client import MetalCloudClient
from metalcloud_cli.infra.settings import Settings, load_settings

__all__: list[str] = [
    "MetalCloudClient",
    "Settings",
    "load_settings",
]
