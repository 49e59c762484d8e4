"""Custom exception hierarchy for metalcloud-cli.

All exceptions that cross layer boundaries must inherit from
:class:`MetalCloudError`.  Raw third-party exceptions (httpx, PyYAML,
pydantic) must NEVER propagate beyond the layer that talks to them —
they are caught there and re-raised as a typed subclass defined here.

Hierarchy
---------
MetalCloudError
├── MissingParameterError
├── ValidationError
├── DecodeError
├── UpstreamError
│   └── ResourceNotFoundError
├── OperationAbortedError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class MetalCloudError(Exception):
    """Base exception for all metalcloud-cli errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command-line input ------------------------------------------------------

class MissingParameterError(MetalCloudError):
    """Raised when a required flag or value was not supplied."""


class ValidationError(MetalCloudError):
    """Raised when a supplied value is present but not acceptable."""


class DecodeError(MetalCloudError):
    """Raised when a configuration file or stream cannot be decoded."""


# --- Remote API --------------------------------------------------------------

class UpstreamError(MetalCloudError):
    """Raised when the API call fails (transport, HTTP or RPC error)."""


class ResourceNotFoundError(UpstreamError):
    """Raised when the API reports that the requested object does not exist."""


# --- Interaction -------------------------------------------------------------

class OperationAbortedError(MetalCloudError):
    """Raised when a destructive operation was not confirmed."""


# --- Environment / configuration ---------------------------------------------

class ConfigurationError(MetalCloudError):
    """Raised when the METALCLOUD_* environment is missing or invalid."""


class EnvironmentError(MetalCloudError):
    """Raised when a required runtime dependency is not available."""
