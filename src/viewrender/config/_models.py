"""Configuration models.

Each section of the configuration file maps to one frozen Pydantic model;
``RenderConfig`` is the root.
"""

from enum import StrEnum
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from viewrender.templating import EnvironmentConfig


class LogLevel(StrEnum):
    """Log level threshold values."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class TemplatesConfig(BaseModel):
    """Template discovery and Jinja2 environment settings."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    root: Path = Path("views")
    suffixes: tuple[str, ...] = (".html",)
    autoescape: bool = True
    strict_undefined: bool = True
    trim_blocks: bool = False
    lstrip_blocks: bool = False

    def environment(self) -> EnvironmentConfig:
        """Return the Jinja2 environment settings for this section."""
        return EnvironmentConfig(
            autoescape=self.autoescape,
            strict_undefined=self.strict_undefined,
            trim_blocks=self.trim_blocks,
            lstrip_blocks=self.lstrip_blocks,
        )


class FormattingConfig(BaseModel):
    """Formatter registry settings."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    timezone: str = "America/New_York"


class CorsConfig(BaseModel):
    """Cross-origin headers attached to dispatched responses."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    allow_origin: str = "*"
    allow_methods: tuple[str, ...] = ("POST", "GET", "OPTIONS", "PUT", "DELETE")
    allow_credentials: bool = True


class RenderConfig(BaseModel):
    """Root configuration for the view-rendering layer."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    formatting: FormattingConfig = Field(default_factory=FormattingConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
