"""Command line entry point.

Usage:
    python -m inventory -h 127.0.0.1 -p 3000 -c ./cache
"""

from pathlib import Path

import typer
import uvicorn

from inventory.core import Settings

cli = typer.Typer(
    name="inventory-service",
    help="Inventory registration HTTP service",
    add_completion=False,
)


@cli.command()
def serve(
    host: str = typer.Option(..., "--host", "-h", help="Server host"),
    port: int = typer.Option(..., "--port", "-p", help="Server port"),
    cache: Path = typer.Option(..., "--cache", "-c", help="Cache directory"),
) -> None:
    """Start the inventory service."""
    from inventory.main import create_app

    app_settings = Settings(HOST=host, PORT=port, CACHE_DIR=cache.resolve())
    uvicorn.run(create_app(app_settings), host=host, port=port)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
