"""
Supabridge - CLI Entry Point.

Usage:
    supabridge serve                  Start the HTTP bridge
    supabridge health                 Check configuration
    supabridge tables                 List tables with row counts
    supabridge query users -f age:gte:18 --limit 10
    supabridge --help                 Show help
"""

import asyncio
import json

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="supabridge",
    help="Supabridge - Supabase database bridge for language-model agents.",
    add_completion=False,
)
console = Console()


def parse_filter_option(raw: str) -> dict[str, str]:
    """Parse "column:operator:value" (value may itself contain colons)."""
    parts = raw.split(":", 2)
    if len(parts) != 3:
        raise typer.BadParameter(f"Expected column:operator:value, got {raw!r}")
    column, operator, value = parts
    return {"column": column, "operator": operator, "value": value}


@app.command()
def serve(
    port: int = typer.Option(None, "--port", "-p", help="Port to run on (default: PORT or 3000)"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the HTTP server."""
    import uvicorn

    from supabridge.config import get_settings
    from supabridge.observability import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level)
    actual_port = port or settings.port

    console.print("\n[bold green]Supabridge[/bold green]")
    console.print(f"Server running on port {actual_port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "supabridge.web.app:app",
        host=settings.host,
        port=actual_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def health() -> None:
    """Check configuration."""
    from supabridge.config import get_settings

    console.print("\n[bold]Supabridge Health Check[/bold]\n")

    settings = get_settings()
    console.print("[green]OK[/green] Configuration loaded")
    console.print(f"   Log level: {settings.log_level}")
    console.print(f"   Default limit: {settings.supabridge_default_limit}")

    ok = True
    if settings.supabase_url and settings.supabase_url.startswith("https://"):
        console.print("[green]OK[/green] Supabase URL configured")
    else:
        console.print("[red]FAIL[/red] Supabase URL missing or invalid")
        ok = False

    if settings.supabase_key:
        console.print("[green]OK[/green] Supabase key configured")
    else:
        console.print("[red]FAIL[/red] Supabase key missing")
        ok = False

    if settings.known_tables:
        console.print(f"[green]OK[/green] Known tables: {', '.join(settings.known_tables)}")
    else:
        console.print(f"[dim]Tables discovered from pg_tables ({settings.supabridge_db_schema})[/dim]")

    if not ok:
        console.print("[dim]Set SUPABASE_URL and SUPABASE_KEY in the environment or .env.[/dim]")
        raise typer.Exit(1)

    console.print("\n[green]All checks passed![/green]")


@app.command()
def tables() -> None:
    """List tables with their row counts."""
    from supabridge.gateway import GatewayError, QueryGateway

    try:
        infos = asyncio.run(QueryGateway().list_tables())
    except GatewayError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    table = Table(title="Tables")
    table.add_column("table_name")
    table.add_column("row_count", justify="right")
    for info in infos:
        table.add_row(info.table_name, str(info.row_count))
    console.print(table)


@app.command()
def query(
    table_name: str = typer.Argument(..., help="Table to query"),
    columns: str = typer.Option("*", "--columns", "-c", help="Comma-separated columns"),
    filters: list[str] = typer.Option(None, "--filter", "-f", help="column:operator:value (repeatable)"),
    limit: int = typer.Option(None, "--limit", "-n", help="Maximum rows (default 100)"),
) -> None:
    """Run a filtered query and print rows as JSON."""
    from supabridge.gateway import GatewayError, QueryGateway
    from supabridge.models import QueryRequest

    request = QueryRequest(
        table_name=table_name,
        columns=columns,
        filters=[parse_filter_option(f) for f in filters or []],
        limit=limit,
    )

    try:
        rows = asyncio.run(QueryGateway().execute(request))
    except GatewayError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)

    console.print_json(json.dumps(rows, default=str))


@app.command()
def version() -> None:
    """Show version information."""
    from supabridge import __version__

    console.print(f"Supabridge version {__version__}")


if __name__ == "__main__":
    app()
