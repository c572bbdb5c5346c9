"""JSON output profiles.

Kept in the domain layer so the serializer, the exporters and the CLI share
one definition without importing each other.
"""

from __future__ import annotations

from enum import Enum


class SerializationFormatting(str, Enum):
    """Output style selectable per serialize call."""

    NONE = "none"
    INDENTED = "indented"

    @classmethod
    def default(cls) -> "SerializationFormatting":
        """Return the profile used when a caller does not pick one."""

        return cls.INDENTED

    @classmethod
    def from_pretty(cls, pretty: bool) -> "SerializationFormatting":
        """Derive a profile from the `pretty_json` connection flag."""

        return cls.INDENTED if pretty else cls.NONE

    def indent(self) -> int | None:
        return 2 if self is SerializationFormatting.INDENTED else None
