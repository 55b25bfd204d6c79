from pathlib import Path

from pydantic import ValidationError

from viewrender.exceptions import ConfigError

from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import RenderConfig


def load_config(
    path: Path | None = None,
    *,
    include_env: bool = True,
    environ: dict[str, str] | None = None,
) -> RenderConfig:
    """Load configuration from defaults, a TOML file and the environment.

    Sources are merged lowest to highest precedence:
    built-in defaults -> TOML file -> VIEWRENDER_* environment variables.

    Args:
        path: Optional TOML file. When given, the file must exist.
        include_env: Include environment variables as a source.
        environ: Mapping to read instead of ``os.environ``.

    Returns:
        Validated, frozen configuration.

    Raises:
        FileNotFoundError: If `path` is given and does not exist.
        ConfigLoadError: If the TOML file cannot be parsed.
        ConfigError: If the merged values fail validation.
    """
    merged: dict[str, object] = {}

    if path is not None:
        merged = deep_merge(merged, read_toml_file(path))

    if include_env:
        merged = deep_merge(merged, parse_env_vars(environ=environ))

    try:
        return RenderConfig.model_validate(merged)
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigError(msg) from e
