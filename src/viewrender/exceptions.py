"""viewrender exceptions."""

from pathlib import Path


class ViewRenderError(Exception):
    """Base exception for viewrender errors."""


class InvalidArgumentError(ViewRenderError, ValueError):
    """Raised when a call is made with arguments that cannot be used.

    Covers the "no templates supplied" condition and malformed key/value
    pairs passed to the ad-hoc dict helper.
    """


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(ViewRenderError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


# =============================================================================
# Template Exceptions
# =============================================================================


class DiscoveryError(ViewRenderError):
    """Raised when a template root cannot be walked.

    Attributes:
        root: The root directory that was requested.
    """

    def __init__(self, message: str, *, root: Path) -> None:
        """Initialize with error message and the offending root.

        Args:
            message: Human-readable error message.
            root: The root directory that was requested.
        """
        super().__init__(message)
        self.root: Path = root


class TemplateError(ViewRenderError):
    """Base exception for template compilation and execution errors."""


class TemplateSyntaxError(TemplateError):
    """Raised when template markup cannot be compiled.

    Unreadable source files, unbalanced control constructs and references to
    unregistered helpers all surface as this error.

    Attributes:
        source_name: Lookup name or path of the offending source.
        lineno: Line reported by the template engine, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        source_name: str,
        lineno: int | None = None,
    ) -> None:
        """Initialize with error message and source location.

        Args:
            message: Human-readable error message.
            source_name: Lookup name or path of the offending source.
            lineno: Line reported by the template engine, if available.
        """
        super().__init__(message)
        self.source_name: str = source_name
        self.lineno: int | None = lineno

    def __str__(self) -> str:
        location = self.source_name
        if self.lineno is not None:
            location = f"{location}:{self.lineno}"
        return f"{location}: {self.args[0]}"


class TemplateExecutionError(TemplateError):
    """Raised when a compiled template fails while rendering a model.

    Attributes:
        template_name: Name of the template being executed.
        cause: The underlying exception raised during execution.
    """

    def __init__(
        self,
        message: str,
        *,
        template_name: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and execution context.

        Args:
            message: Human-readable error message.
            template_name: Name of the template being executed.
            cause: The underlying exception raised during execution.
        """
        super().__init__(message)
        self.template_name: str = template_name
        self.cause: Exception | None = cause


class TemplateNotFoundError(TemplateError, KeyError):
    """Raised when a catalog has no template under the requested key.

    Attributes:
        key: The lookup key that was not found.
    """

    def __init__(self, message: str, *, key: str) -> None:
        """Initialize with error message and lookup key.

        Args:
            message: Human-readable error message.
            key: The lookup key that was not found.
        """
        super().__init__(message)
        self.key: str = key

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])
