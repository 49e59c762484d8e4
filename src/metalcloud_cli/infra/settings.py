"""Runtime configuration using pydantic-settings.

All settings are loaded from ``METALCLOUD_*`` environment variables or a
``.env`` file in the working directory::

    METALCLOUD_ENDPOINT=https://api.example.com
    METALCLOUD_API_KEY=12:AbCdEf0123
    METALCLOUD_USER_EMAIL=ops@example.com
    METALCLOUD_DATACENTER=dc-prod
    METALCLOUD_ADMIN=true

pydantic errors never leave this module: :func:`load_settings` turns
them into :class:`~metalcloud_cli.exceptions.ConfigurationError`.
"""

from __future__ import annotations

import re

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from metalcloud_cli.exceptions import ConfigurationError

API_KEY_PATTERN = re.compile(r"^\d+:[0-9a-zA-Z]*$")

DEVELOPER_ENDPOINT_SUFFIX = "/api/developer/developer"

_REQUIRED_HINT = (
    "Set METALCLOUD_ENDPOINT, METALCLOUD_API_KEY, METALCLOUD_USER_EMAIL "
    "and METALCLOUD_DATACENTER."
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="METALCLOUD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    endpoint: str = Field(description="API host, e.g. https://api.example.com")
    api_key: str = Field(description="API key in the form <id>:<secret>")
    user_email: str = Field(description="Account e-mail the API key belongs to")
    datacenter: str = Field(description="Default datacenter label")

    admin: bool = Field(default=False, description="Enable developer/admin commands")
    logging_enabled: bool = Field(default=False, description="Log API calls to stderr")
    suppress_prompts: bool = Field(
        default=False,
        description="Read confirmations without printing the prompt text",
    )
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    @field_validator("endpoint", "user_email", "datacenter")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("api_key")
    @classmethod
    def _api_key_format(cls, value: str) -> str:
        if not API_KEY_PATTERN.match(value):
            raise ValueError(
                "API Key is not valid. It should start with a number followed "
                "by a colon followed by alphanumeric characters <id>:<chars>",
            )
        return value

    @property
    def developer_endpoint(self) -> str:
        """Full JSON-RPC URL of the developer API."""
        return self.endpoint.rstrip("/") + DEVELOPER_ENDPOINT_SUFFIX

    @property
    def api_key_id(self) -> str:
        """Numeric part of the API key, used to sign requests."""
        return self.api_key.split(":", 1)[0]


def load_settings() -> Settings:
    """Read and validate the environment.

    Raises
    ------
    ConfigurationError
        When a variable is missing or malformed.
    """
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            name = "METALCLOUD_" + str(error["loc"][0]).upper() if error["loc"] else "?"
            if error["type"] == "missing":
                problems.append(f"{name} must be set")
            else:
                problems.append(f"{name}: {error['msg']}")
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(problems),
            hint=_REQUIRED_HINT,
        ) from exc
