"""Rich UI components for the CLI.

Kept apart from the commands so tables/panels can be reused.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import VerifyRepositoryResponse


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in --json mode)."""

    title = Text("docstore", style="bold cyan")
    subtitle = Text("Snapshot repositories • Cluster nodes", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_nodes_table(repository: str, response: VerifyRepositoryResponse) -> Table:
    """One row per node that verified `repository`."""

    table = Table(title=f"Repository '{repository}' verified by {len(response.nodes)} node(s)")
    table.add_column("Node id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    for node_id, node in response.nodes.items():
        table.add_row(node_id, node.name or "-")
    return table


def build_error_panel(response: VerifyRepositoryResponse) -> Panel:
    """Panel describing why a verify call failed."""

    body = Text()
    status = response.api_call.status_code if response.api_call else None
    body.append(f"HTTP status: {status if status is not None else '-'}\n")
    cause = response.server_error.error if response.server_error else None
    if cause is not None:
        if cause.type:
            body.append(f"Type: {cause.type}\n", style="bold")
        if cause.reason:
            body.append(f"Reason: {cause.reason}\n")
    return Panel(body, title=Text("Verification failed", style="bold red"), border_style="red")
