"""Command line tools for running and inspecting the absence service."""

import typer
from rich.console import Console
from rich.table import Table

from src.absence_api.core.pagination import normalize_pagination
from src.absence_api.core.services import DbSessionService
from src.absence_api.entities.service.absence import AbsenceRepository
from src.absence_api.runtime.context import get_config

console = Console()

app = typer.Typer(
    help="🏠 Absence API - declarations of temporary home absence",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    try:
        service = DbSessionService()
        service.create_all()
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize the database: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(
        f"[green]✅ Database ready at {get_config().database.safe_url}[/green]"
    )


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "src.absence_api.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        access_log=False,
    )


@app.command("list")
def list_absences(
    page: int = typer.Option(1, "--page", help="Page number"),
    limit: int = typer.Option(10, "--limit", "-l", help="Records per page"),
    sort_by: str = typer.Option("created_at", "--sort-by", help="Sort field"),
    sort_order: str = typer.Option("desc", "--sort-order", help="asc or desc"),
) -> None:
    """Print one page of absences."""
    query = normalize_pagination(
        page, limit, sort_by, sort_order, config=get_config().absences.pagination
    )
    service = DbSessionService()
    service.create_all()

    with service.session_scope() as session:
        result = AbsenceRepository(session).list_page(query)

    if not result.items:
        console.print("[yellow]No absences declared[/yellow]")
        return

    table = Table(title=f"Absences (page {query.page}/{result.total_pages})")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("From", style="magenta")
    table.add_column("To", style="magenta")
    table.add_column("Days", style="yellow")
    table.add_column("Phone", style="blue")
    table.add_column("Address")

    for absence in result.items:
        table.add_row(
            str(absence.id),
            absence.full_name,
            absence.start_date.isoformat(),
            absence.end_date.isoformat(),
            str(absence.duration_days),
            absence.phone,
            absence.address,
        )

    console.print(table)
    console.print(f"\n[green]{result.total_items} absences in total[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
