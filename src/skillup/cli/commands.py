"""CLI commands for the SkillUp platform.

Commands:
- init-db: Apply migrations and seed the catalogue
- migrations: Show applied schema migrations
- serve: Run the Web API with uvicorn
- courses: List courses
- books: List marketplace listings
- ask: Send one message to the AI mentor
- check-llm: Check the mentor's LLM provider is configured and reachable
"""

import sqlite3
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from skillup.config.app_config import load_app_config
from skillup.core.cart import list_price
from skillup.core.mentor import ask_mentor
from skillup.db.books_repository import get_all_books
from skillup.db.catalog_repository import list_courses
from skillup.db.database import get_db_path, init_db
from skillup.db.migrations import MIGRATIONS, applied_migrations, current_version
from skillup.llm.client import LLMClient

app = typer.Typer(
    name="skillup",
    help="SkillUp education platform: API server and admin tools.",
    no_args_is_help=True,
)

console = Console()

DB_OPTION_HELP = "Database file (defaults to the configured path)"


def _open_db(db: Path | None, seed: bool = True) -> Path:
    """Initialize the database, exiting with an error on failure."""
    path = db or load_app_config().database_path
    try:
        init_db(path, seed=seed)
    except (sqlite3.Error, OSError) as e:
        console.print(f"[red]✗ Could not open database {path}: {e}[/red]")
        raise typer.Exit(code=1)
    return path


def _truncate(text: str, max_len: int = 60) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


@app.command(name="init-db")
def init_db_command(
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
    no_seed: bool = typer.Option(False, "--no-seed", help="Skip catalogue seed data"),
) -> None:
    """Create or upgrade the database and seed empty tables."""
    path = _open_db(db, seed=not no_seed)
    console.print("[green]✓ Database ready[/green]")
    console.print(f"  [dim]path:[/dim]    {path}")
    console.print(f"  [dim]version:[/dim] {current_version()}/{MIGRATIONS[-1].version}")


@app.command()
def migrations(
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """Show applied schema migrations."""
    _open_db(db, seed=False)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Version", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Applied at", style="dim")

    for version, name, applied_at in applied_migrations():
        table.add_row(str(version), name, applied_at)

    console.print(table)
    console.print(f"[dim]database: {get_db_path()}[/dim]")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
) -> None:
    """Run the Web API server."""
    import uvicorn

    server = load_app_config().server
    host = host or server.host
    port = port or server.port

    console.print(f"[blue]Starting SkillUp API on http://{host}:{port}[/blue]")
    if server.dev_mode:
        console.print("  [dim]dev mode: built client not served[/dim]")

    uvicorn.run("skillup.web.api:app", host=host, port=port, reload=reload)


@app.command()
def courses(
    department: str | None = typer.Option(None, "--department", "-d", help="Filter by department"),
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """List courses."""
    _open_db(db)
    items = list_courses(department)

    if not items:
        console.print("[yellow]⚠ No courses found[/yellow]")
        raise typer.Exit(code=0)

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Dept", width=6)
    table.add_column("Title")
    table.add_column("Instructor", style="dim")

    for c in items:
        table.add_row(str(c.id), c.department or "", _truncate(c.title), c.instructor or "")

    console.print(table)


@app.command()
def books(
    department: str | None = typer.Option(None, "--department", "-d", help="Filter by department"),
    db: Path | None = typer.Option(None, "--db", help=DB_OPTION_HELP),
) -> None:
    """List marketplace listings."""
    _open_db(db)
    items = get_all_books(department)

    if not items:
        console.print("[yellow]⚠ No books listed[/yellow]")
        raise typer.Exit(code=0)

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Price", justify="right")
    table.add_column("M.R.P.", justify="right", style="dim")
    table.add_column("Stock", justify="center")

    for b in items:
        stock = f"{b.stock}" if b.in_stock else "[red]sold out[/red]"
        table.add_row(
            str(b.id),
            _truncate(b.title),
            f"₹{b.price:g}",
            f"₹{list_price(b.price)}",
            stock,
        )

    console.print(table)


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message for the mentor"),
    department: str | None = typer.Option(None, "--department", "-d", help="Student department"),
) -> None:
    """Ask the AI mentor a single question."""
    reply = ask_mentor(message, department)

    if reply.fallback:
        console.print(f"[yellow]⚠ {reply.text}[/yellow]")
        raise typer.Exit(code=1)

    console.print(reply.text)
    if reply.model:
        console.print(f"[dim]{reply.model} · {reply.latency_ms} ms[/dim]")


@app.command("check-llm")
def check_llm(
    provider: str | None = typer.Option(
        None, "--provider", "-p", help="Provider to check (defaults to the mentor's)"
    ),
) -> None:
    """Check the mentor's LLM provider is configured and reachable."""
    client = LLMClient(provider=provider)
    config = client.config

    if config.requires_key and not config.api_key:
        console.print(f"[red]✗ No API key configured for {config.provider}[/red]")
        raise typer.Exit(code=1)

    if not client.is_available():
        console.print(f"[red]✗ {config.provider} not reachable at {config.base_url}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ {config.provider} available[/green] ({config.model})")


if __name__ == "__main__":
    app()
