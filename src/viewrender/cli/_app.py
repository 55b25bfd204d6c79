"""The command-line interface for viewrender."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.console import Console
from rich.table import Table

from viewrender.exceptions import (
    DiscoveryError,
    InvalidArgumentError,
    TemplateError,
    TemplateSyntaxError,
)
from viewrender.formatting import build_registry
from viewrender.templating import TemplateComposer, TemplateSetCompiler

from ._shared import ExitCode, exit_with_error, load_cli_config, parse_model

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]

ConfigOption = Annotated[
    Path | None, Parameter(name="--config", help="Path to a TOML config file")
]


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the CLI application.

    Args:
        console: Console for regular output.
        error_console: Console for errors. Defaults to stderr.
        exit_on_error: Whether cyclopts exits on parse errors.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="viewrender",
        help="Compose and serve Jinja2 views with the shared formatter registry.",
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.command
    def check(  # pyright: ignore[reportUnusedFunction]
        root: Annotated[
            Path | None,
            Parameter(help="Template directory. Defaults to templates.root."),
        ] = None,
        *,
        config: ConfigOption = None,
        verbose: Annotated[
            bool, Parameter(help="List every compiled template")
        ] = False,
    ) -> None:
        """Compile every template under ROOT and report the first error."""
        loaded, logger = load_cli_config(config, console=error_console)
        templates = loaded.templates
        tree = root if root is not None else templates.root

        registry = build_registry(timezone=loaded.formatting.timezone, logger=logger)
        compiler = TemplateSetCompiler(
            registry, config=templates.environment(), logger=logger
        )
        try:
            catalog = compiler.compile_tree(tree, suffixes=templates.suffixes)
        except DiscoveryError as e:
            exit_with_error(str(e), ExitCode.NOT_FOUND, console=error_console)
        except TemplateSyntaxError as e:
            exit_with_error(str(e), ExitCode.TEMPLATE_ERROR, console=error_console)

        if verbose:
            table = Table("Template", "Sources")
            for name, named in catalog.items():
                table.add_row(name, str(len(named.sources)))
            console.print(table)
        console.print(
            f"[green]OK[/green] {len(catalog)} templates compiled from {tree}",
            highlight=False,
        )

    @app.command
    def render(  # pyright: ignore[reportUnusedFunction]
        *templates: Annotated[
            Path, Parameter(help="Fragment files, entry template first")
        ],
        layout: Annotated[
            Path | None, Parameter(help="Layout the fragments fill")
        ] = None,
        model: Annotated[
            str | None, Parameter(help="Render model as a JSON string")
        ] = None,
        model_file: Annotated[
            Path | None, Parameter(help="Render model as a JSON file")
        ] = None,
        config: ConfigOption = None,
    ) -> None:
        """Render templates against a JSON model and print the result."""
        loaded, logger = load_cli_config(config, console=error_console)
        data = parse_model(model, model_file, console=error_console)

        registry = build_registry(timezone=loaded.formatting.timezone, logger=logger)
        composer = TemplateComposer(
            registry, config=loaded.templates.environment(), logger=logger
        )
        try:
            if layout is not None:
                output = composer.compose_with_layout(layout, data, *templates)
            else:
                output = composer.compose_fragment(data, *templates)
        except InvalidArgumentError as e:
            exit_with_error(str(e), ExitCode.INVALID_ARGUMENT, console=error_console)
        except TemplateError as e:
            exit_with_error(str(e), ExitCode.TEMPLATE_ERROR, console=error_console)

        console.out(output, highlight=False, end="")

    @app.command
    def serve(  # pyright: ignore[reportUnusedFunction]
        *,
        host: Annotated[str, Parameter(help="Bind socket to this host.")] = "127.0.0.1",
        port: Annotated[int, Parameter(help="Bind socket to this port.")] = 8000,
        log_level: Annotated[LogLevel, Parameter(help="Server log level.")] = "info",
        access_log: Annotated[bool, Parameter(help="Enable access log.")] = True,
        config: ConfigOption = None,
    ) -> None:
        """Run the view server using uvicorn."""
        import uvicorn

        from viewrender.server import create_app as create_server

        loaded, _ = load_cli_config(config, console=error_console)
        console.print(f"Starting viewrender on {host}:{port}", highlight=False)
        uvicorn.run(
            create_server(loaded),
            host=host,
            port=port,
            log_level=log_level,
            access_log=access_log,
        )

    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `viewrender` CLI."""
    app = create_app()
    app()


if __name__ == "__main__":
    main()
