"""Doctor command for environment diagnostics."""

from __future__ import annotations

import io

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import ConnectionSettings, get_settings
from core.domain.formatting import SerializationFormatting
from core.domain.models import CompactNodeInfo, VerifyRepositoryResponse
from core.exceptions import ClientError
from core.serialization import InternalSerializer

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(settings: ConnectionSettings, transport: httpx.BaseTransport | None = None) -> tuple[bool, str]:
    try:
        with build_client(settings, transport=transport) as client:
            response = client.get("/")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


def _check_serializer(settings: ConnectionSettings) -> tuple[bool, str]:
    """Round-trip a sample response through both output profiles."""

    try:
        serializer = InternalSerializer(settings)
        sample = VerifyRepositoryResponse(nodes={"doctor": CompactNodeInfo(name="doctor")})
        for formatting in SerializationFormatting:
            buffer = io.BytesIO()
            serializer.serialize(sample, buffer, formatting)
            buffer.seek(0)
            if serializer.deserialize(VerifyRepositoryResponse, buffer) != sample:
                return False, f"round trip mismatch ({formatting.value})"
        return True, "OK"
    except (ClientError, ValueError) as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics."""

    settings = get_settings()

    table = Table(title="docstore Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Cluster URL", "OK", settings.url)
    table.add_row(
        "Output profile",
        "OK",
        SerializationFormatting.from_pretty(settings.pretty_json).value,
    )
    table.add_row(
        "Async parse failures",
        "WARN" if settings.swallow_async_errors else "OK",
        "returned as defaults" if settings.swallow_async_errors else "raised",
    )

    ok_ser, detail_ser = _check_serializer(settings)
    table.add_row("Serializer", "OK" if ok_ser else "FAIL", detail_ser)

    ok_http, detail_http = _check_http(settings)
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not (ok_ser and ok_http):
        raise typer.Exit(code=1)
