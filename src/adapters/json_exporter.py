"""JSON export of decoded responses.

Goes through the client serializer so exported files follow the same wire
rules (aliases, no nulls) as request bodies.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from core.domain.formatting import SerializationFormatting
from core.serialization import InternalSerializer


def export_response_json(
    *,
    response: BaseModel,
    output_path: Path,
    serializer: InternalSerializer | None = None,
    formatting: SerializationFormatting | None = None,
) -> Path:
    """Write `response` as UTF-8 JSON; `pretty_json` picks the default profile."""

    serializer = serializer or InternalSerializer()
    if formatting is None:
        formatting = SerializationFormatting.from_pretty(serializer.settings.pretty_json)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as handle:
        serializer.serialize(response, handle, formatting)
        handle.write(b"\n")
    return output_path
