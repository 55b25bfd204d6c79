"""Jinja2 Environment factory."""

from dataclasses import dataclass

from jinja2 import BaseLoader, Environment, StrictUndefined, Undefined, pass_environment
from markupsafe import Markup

from viewrender.formatting import FormatterRegistry

from ._context import model_context


@dataclass(slots=True, frozen=True)
class EnvironmentConfig:
    """Configuration for Jinja2 Environment.

    Attributes:
        autoescape: Escape substituted values (default: True, output is HTML).
        strict_undefined: Raise when markup dereferences a missing field
            instead of rendering an empty string.
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
    """

    autoescape: bool = True
    strict_undefined: bool = True
    trim_blocks: bool = False
    lstrip_blocks: bool = False
    keep_trailing_newline: bool = True


@pass_environment
def render_fragment(env: Environment, markup: str, model: object = None) -> Markup:
    """Render an inline markup string against `model` from inside a template.

    Evaluated lazily at call time against the calling environment, so the
    fragment sees the same helper registry as the page rendering it.
    """
    template = env.from_string(markup)
    return Markup(template.render(model_context(model)))  # noqa: S704


def create_environment(
    registry: FormatterRegistry,
    loader: BaseLoader | None = None,
    *,
    config: EnvironmentConfig | None = None,
) -> Environment:
    """Create a Jinja2 Environment with the formatter registry attached.

    Every registry helper is installed both as a filter and as a global, so
    ``{{ value|format_phone }}`` and ``{{ format_phone(value) }}`` are
    equivalent. Referencing an unknown filter fails at compile time.

    The registry is copied into the environment's own tables; the registry
    itself is never modified.

    Args:
        registry: Helper table shared by all templates.
        loader: Loader resolving template names for extends/include/import.
        config: Optional environment configuration. If None, uses defaults.

    Returns:
        Configured Jinja2 Environment.

    Example:
        from jinja2 import DictLoader

        env = create_environment(
            build_registry(),
            DictLoader({"phone.html": "{{ number|format_phone }}"}),
        )
        env.get_template("phone.html").render(number="2125551234")
    """
    if config is None:
        config = EnvironmentConfig()

    env = Environment(
        loader=loader,
        autoescape=config.autoescape,
        undefined=StrictUndefined if config.strict_undefined else Undefined,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        keep_trailing_newline=config.keep_trailing_newline,
    )

    env.filters.update(registry)
    env.globals.update(registry)
    env.globals["render_fragment"] = render_fragment

    return env
