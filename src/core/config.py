"""Client configuration.

Centralizes environment variables (pydantic-settings) so the serializer, the
HTTP builders and the CLI all read the same typed contract.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConnectionSettings(BaseSettings):
    """Connection and serialization settings for one client configuration.

    One serializer is typically built per instance and reused for as long as
    the instance lives.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCSTORE_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    url: str = Field(
        default="http://localhost:9200",
        min_length=8,
        description="Base URL of the cluster node the client talks to.",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="docstore-client/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )

    pretty_json: bool = Field(
        default=False,
        description="Send request bodies (and exports) indented instead of compact.",
    )
    strict_deserialization: bool = Field(
        default=False,
        description="Validate responses in pydantic strict mode (no type coercion).",
    )
    swallow_async_errors: bool = Field(
        default=True,
        description=(
            "Asynchronous deserialization returns the type's default value instead "
            "of raising when the body cannot be parsed or converted."
        ),
    )


@lru_cache(maxsize=1)
def get_settings() -> ConnectionSettings:
    """Return the process-wide settings, read once from the environment."""

    return ConnectionSettings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
