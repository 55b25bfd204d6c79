"""Shared CLI utilities for commands."""

from enum import IntEnum
from pathlib import Path
from typing import Never

import orjson
from rich.console import Console
from structlog.typing import FilteringBoundLogger

from viewrender.config import RenderConfig, load_config
from viewrender.exceptions import ConfigError
from viewrender.utils import create_logger

__all__ = [
    "ExitCode",
    "exit_with_error",
    "get_error_console",
    "load_cli_config",
    "parse_model",
]


class ExitCode(IntEnum):
    """Standard exit codes for viewrender CLI commands."""

    SUCCESS = 0
    TEMPLATE_ERROR = 1
    CONFIG_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INVALID_ARGUMENT = 5


def get_error_console() -> Console:
    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.TEMPLATE_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use.
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}", highlight=False)
    raise SystemExit(code)


def load_cli_config(
    path: Path | None, *, console: Console | None = None
) -> tuple[RenderConfig, FilteringBoundLogger]:
    """Load configuration and build the logger it describes, or exit."""
    try:
        config = load_config(path)
    except FileNotFoundError:
        exit_with_error(f"config file not found: {path}", ExitCode.NOT_FOUND, console=console)
    except ConfigError as e:
        exit_with_error(str(e), ExitCode.CONFIG_ERROR, console=console)

    logger = create_logger(
        level=config.logging.level.value,
        log_format=config.logging.format.value,  # type: ignore[arg-type]
        log_file=config.logging.file,
    )
    return config, logger


def parse_model(
    model: str | None, model_file: Path | None, *, console: Console | None = None
) -> object:
    """Decode the render model given inline or as a JSON file."""
    if model is not None and model_file is not None:
        exit_with_error(
            "--model and --model-file are mutually exclusive",
            ExitCode.INVALID_ARGUMENT,
            console=console,
        )
    try:
        if model_file is not None:
            return orjson.loads(model_file.read_bytes())
        if model is not None:
            return orjson.loads(model)
    except orjson.JSONDecodeError as e:
        exit_with_error(f"model is not valid JSON: {e}", ExitCode.INVALID_ARGUMENT, console=console)
    except OSError as e:
        exit_with_error(f"cannot read model file: {e}", ExitCode.IO_ERROR, console=console)
    return {}
