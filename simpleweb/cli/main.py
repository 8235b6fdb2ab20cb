"""Main entry point for the SimpleWeb CLI."""

import typer
from rich.console import Console
from rich.table import Table

from simpleweb._version import __version__
from simpleweb.config.settings import get_settings
from simpleweb.core.logging import get_logger, setup_logging
from simpleweb.handlers.registry import type_name

from .helpers import load_registry


logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        Console().print(f"simpleweb {__version__}")
        raise typer.Exit()


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)


@app.callback()
def app_main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """SimpleWeb - convention-based POST handler dispatch."""
    settings = get_settings()
    setup_logging(
        json_logs=settings.logging.json_logs,
        log_level_name=settings.logging.level,
        log_file=settings.logging.file,
    )


@app.command()
def routes(
    target: str = typer.Argument(
        ..., help="Handler registry to inspect, as 'module:attribute'."
    ),
) -> None:
    """List the handlers registered in a registry."""
    registry = load_registry(target)

    table = Table(title=f"Handlers in {target}")
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Path", style="green", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Input")
    table.add_column("Handler", style="dim")

    for registration in sorted(
        registry.registrations(), key=lambda r: (r.path, r.method)
    ):
        table.add_row(
            registration.method,
            registration.path,
            registration.kind.value,
            type_name(registration.input_type) if registration.kind.is_typed else "-",
            registration.name,
        )

    Console().print(table)


@app.command()
def serve(
    target: str = typer.Argument(
        ..., help="Handler registry to serve, as 'module:attribute'."
    ),
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address."),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port.", min=1, max=65535),
) -> None:
    """Serve a handler registry with uvicorn."""
    import uvicorn

    from simpleweb.api import create_app

    registry = load_registry(target)
    logger.info("serve_starting", target=target, host=host, port=port)
    uvicorn.run(create_app(registry), host=host, port=port, log_config=None)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
