"""Command-line interface for viewrender."""

from ._app import app, create_app, main
from ._shared import ExitCode

__all__ = ["ExitCode", "app", "create_app", "main"]
