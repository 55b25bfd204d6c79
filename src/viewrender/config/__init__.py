"""viewrender configuration.

Example:
    >>> from viewrender.config import load_config
    >>> config = load_config()
    >>> config.formatting.timezone
    'America/New_York'
"""

from viewrender.exceptions import ConfigError, ConfigLoadError

from ._load import load_config
from ._loader import (
    deep_merge,
    parse_env_value,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    CorsConfig,
    FormattingConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    RenderConfig,
    TemplatesConfig,
)

__all__ = [
    "ConfigError",
    "ConfigLoadError",
    "CorsConfig",
    "FormattingConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RenderConfig",
    "TemplatesConfig",
    "deep_merge",
    "load_config",
    "parse_env_value",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
]
