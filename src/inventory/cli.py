"""Command-line interface for the inventory service."""

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from src.inventory.core.services import DbSessionService, InventoryService
from src.inventory.runtime.config.settings import EnvironmentVariables
from src.inventory.runtime.context import get_config
from src.inventory.runtime.init_db import init_db

console = Console()

app = typer.Typer(
    name="inventory",
    help="Product inventory service commands",
    rich_markup_mode="rich",
)


@app.command("init-db")
def init_db_command() -> None:
    """Create the database tables."""
    init_db()
    console.print("[green]✓[/green] Database tables created")


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Bind address (defaults to config)"),
    port: int | None = typer.Option(None, help="Port (defaults to config)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    config = get_config()
    uvicorn.run(
        "src.inventory.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        log_level=EnvironmentVariables().log_level.lower(),
    )


@app.command()
def products(
    active_only: bool = typer.Option(
        False, "--active-only", help="Hide deactivated products"
    ),
) -> None:
    """Show the stored products."""
    database_service = DbSessionService()
    try:
        with database_service.session_scope() as session:
            service = InventoryService.from_session(session)
            items = service.list_products(active=True if active_only else None)
    finally:
        database_service.dispose()

    if not items:
        console.print("[yellow]No products found[/yellow]")
        return

    table = Table(title="Products")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("HSN")
    table.add_column("Stock", justify="right")
    table.add_column("Active", justify="center")
    table.add_column("Id", style="dim")

    for product in items:
        table.add_row(
            product.product_code,
            product.product_name,
            product.hsn_code or "-",
            str(product.total_stock),
            "✅" if product.active else "❌",
            str(product.id),
        )
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
