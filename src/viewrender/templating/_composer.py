"""Layout and fragment composition."""

from markupsafe import Markup
from structlog.typing import FilteringBoundLogger

from viewrender.exceptions import InvalidArgumentError, TemplateExecutionError
from viewrender.formatting import FormatterRegistry
from viewrender.utils import get_logger

from ._catalog import NamedTemplate, TemplateCatalog
from ._compiler import TemplateSetCompiler
from ._environment import EnvironmentConfig
from ._sources import TemplateLike, TemplateSource, as_source


class TemplateComposer:
    """Renders pages and fragments against caller-supplied models.

    Ad-hoc compositions (`compose_with_layout`, `compose_fragment`,
    `compose_from_string`) are compiled fresh on every call and never
    cached. Precompiled templates are rendered with `compose_from_catalog`.
    All call shapes execute through `NamedTemplate.render`.

    Sources may be given as path strings, `pathlib.Path` objects or
    `TemplateSource` instances.

    Example:
        composer = TemplateComposer(build_registry())
        html = composer.compose_with_layout(
            "views/master.html", {"user": user}, "views/profile.html"
        )
    """

    def __init__(
        self,
        registry: FormatterRegistry,
        *,
        config: EnvironmentConfig | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_logger()
        )
        self._compiler: TemplateSetCompiler = TemplateSetCompiler(
            registry, config=config, logger=self._logger
        )

    @property
    def registry(self) -> FormatterRegistry:
        return self._compiler.registry

    def compose_with_layout(
        self, layout: TemplateLike, model: object, *fragments: TemplateLike
    ) -> str:
        """Compile `layout` with `fragments` and render it against `model`."""
        sources = [as_source(layout), *(as_source(f) for f in fragments)]
        named = self._compiler.compile_named(sources[0].name, sources)
        return self._execute(named, model)

    def compose_fragment(self, model: object, *fragments: TemplateLike) -> str:
        """Render `fragments` without a layout.

        The template is named after the last path segment of the first
        fragment, which is also the entry template.

        Raises:
            InvalidArgumentError: If no fragments are given. No file is read.
        """
        return self._execute(self._compile_fragments(fragments), model)

    def compose_html(self, model: object, *fragments: TemplateLike) -> Markup:
        """Render `fragments` as trusted HTML for embedding in another page.

        The result is already escaped by the engine, so it is wrapped as
        ``Markup`` and will not be escaped a second time when substituted.
        """
        return Markup(self.compose_fragment(model, *fragments))  # noqa: S704

    def compose_from_string(
        self, markup: str, model: object, *, name: str = "template"
    ) -> str:
        """Compile inline `markup` and render it. No file I/O is performed."""
        source = TemplateSource.from_string(markup, name=name)
        named = self._compiler.compile_named(name, [source])
        return self._execute(named, model)

    def compose_from_catalog(
        self, catalog: TemplateCatalog, key: str, model: object
    ) -> str:
        """Render the precompiled template stored under `key`.

        Raises:
            TemplateNotFoundError: If `catalog` has no such key.
        """
        return self._execute(catalog.get_template(key), model)

    def _compile_fragments(self, fragments: tuple[TemplateLike, ...]) -> NamedTemplate:
        if not fragments:
            msg = "no templates supplied"
            raise InvalidArgumentError(msg)
        sources = [as_source(fragment) for fragment in fragments]
        return self._compiler.compile_named(sources[0].name, sources)

    def _execute(self, named: NamedTemplate, model: object) -> str:
        try:
            return named.render(model)
        except TemplateExecutionError as e:
            self._logger.warning(
                "template_execution_failed",
                template=named.name,
                error=str(e.cause) if e.cause is not None else str(e),
            )
            raise
