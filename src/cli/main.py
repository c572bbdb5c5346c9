"""docstore command line."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_response_json
from adapters.snapshot_client import SnapshotClient
from cli import doctor
from cli.ui_components import build_error_panel, build_nodes_table, print_banner
from core.config import get_settings
from core.domain.formatting import SerializationFormatting
from core.domain.models import VerifyRepositoryResponse
from core.exceptions import TransportError
from core.serialization import InternalSerializer

app = typer.Typer(no_args_is_help=True, help="Document store client utilities.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _render_json(serializer: InternalSerializer, response: VerifyRepositoryResponse) -> str:
    stream = io.BytesIO()
    serializer.serialize(response, stream, SerializationFormatting.default())
    return stream.getvalue().decode("utf-8")


@app.command(name="verify-repository")
def verify_repository(
    repository: str = typer.Argument(..., help="Name of the snapshot repository."),
    url: Optional[str] = typer.Option(None, "--url", help="Cluster URL (overrides DOCSTORE_URL)."),
    as_json: bool = typer.Option(False, "--json", help="Print the response as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the response to a JSON file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Check that every node can access REPOSITORY."""

    _configure_logging(verbose)

    settings = get_settings()
    if url:
        settings = settings.model_copy(update={"url": url})

    serializer = InternalSerializer(settings)
    client = SnapshotClient(settings, serializer=serializer)
    try:
        response = client.verify_repository(repository)
    except TransportError as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc
    except ValidationError as exc:
        _err_console.print(f"[red]Unreadable response body:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(_render_json(serializer, response))
    else:
        print_banner(_console)
        if response.is_valid:
            _console.print(build_nodes_table(repository, response))
        else:
            _console.print(build_error_panel(response))

    if output is not None:
        path = export_response_json(response=response, output_path=output, serializer=serializer)
        _err_console.print(f"[green]Saved response to:[/green] {path}")

    if not response.is_valid:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
