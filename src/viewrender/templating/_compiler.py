"""Template set compilation."""

from collections.abc import Iterable, Sequence
from pathlib import Path

import jinja2
from jinja2 import DictLoader, nodes
from structlog.typing import FilteringBoundLogger

from viewrender.exceptions import (
    DiscoveryError,
    InvalidArgumentError,
    TemplateSyntaxError,
)
from viewrender.formatting import FormatterRegistry
from viewrender.utils import get_logger

from ._catalog import NamedTemplate, TemplateCatalog
from ._environment import EnvironmentConfig, create_environment
from ._sources import (
    DEFAULT_SUFFIXES,
    ParseState,
    TemplateDiscovery,
    TemplateLike,
    TemplateSource,
    as_source,
    list_template_sources,
)

type SetDescriptor = Sequence[TemplateLike]

# Names Jinja2 binds inside macros, call blocks and loops.
_IMPLICIT_CALLABLES = frozenset({"caller", "kwargs", "loop", "super", "varargs"})


def _entry_markup(parent: str, fragments: Iterable[str]) -> str:
    """Markup that fills `parent`'s blocks with the given fragments."""
    return "{% extends " + repr(parent) + " %}" + "".join(fragments)


def _undeclared_call(
    env: jinja2.Environment, tree: nodes.Template
) -> nodes.Name | None:
    """Return the first function-style call of an unregistered name.

    Names bound by the template itself through set, for, with, macro or
    import count as declared.
    """
    bound = set(_IMPLICIT_CALLABLES)
    bound.update(
        name.name
        for name in tree.find_all(nodes.Name)
        if name.ctx in {"store", "param"}
    )
    bound.update(macro.name for macro in tree.find_all(nodes.Macro))
    bound.update(imported.target for imported in tree.find_all(nodes.Import))
    for imported in tree.find_all(nodes.FromImport):
        bound.update(
            name[1] if isinstance(name, tuple) else name for name in imported.names
        )

    for call in tree.find_all(nodes.Call):
        callee = call.node
        if (
            isinstance(callee, nodes.Name)
            and callee.name not in env.globals
            and callee.name not in bound
        ):
            return callee
    return None


def _syntax_error(
    error: jinja2.TemplateSyntaxError, source: TemplateSource
) -> TemplateSyntaxError:
    return TemplateSyntaxError(
        error.message or str(error),
        source_name=source.filename or source.name,
        lineno=error.lineno,
    )


class TemplateSetCompiler:
    """Compiles named template sets into catalogs.

    Every compiled set gets its own Jinja2 environment, built from scratch
    with the registry attached. Sets never share parse state, even when
    they reference the same files, so one set's helpers or errors cannot
    affect another's result.

    Composition rule: the first source of a set is the entry template. When
    more sources follow, the entry becomes a child template that extends the
    first source and carries the remaining sources, so fragments fill the
    layout's ``{% block %}`` slots. Every source is also loadable by its
    lookup name for ``{% include %}`` and ``{% import %}``.
    """

    def __init__(
        self,
        registry: FormatterRegistry,
        *,
        config: EnvironmentConfig | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._registry: FormatterRegistry = registry
        self._config: EnvironmentConfig | None = config
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_logger()
        )

    @property
    def registry(self) -> FormatterRegistry:
        return self._registry

    def compile_named(
        self, name: str, sources: Sequence[TemplateSource]
    ) -> NamedTemplate:
        """Compile `sources` together into one named template.

        Args:
            name: Name of the resulting template.
            sources: Entry source first, then fragments.

        Returns:
            The compiled template.

        Raises:
            InvalidArgumentError: If `sources` is empty or two different
                sources share a lookup name.
            TemplateSyntaxError: If any source cannot be read or compiled.
        """
        if not sources:
            msg = f"no templates supplied for {name}"
            raise InvalidArgumentError(msg)

        markups: dict[str, str] = {}
        env = create_environment(
            self._registry, DictLoader(markups), config=self._config
        )

        owners: dict[str, TemplateSource] = {}
        bodies: list[str] = []
        for source in sources:
            owner = owners.setdefault(source.name, source)
            if (owner.path, owner.markup) != (source.path, source.markup):
                msg = (
                    f"{owner.filename or owner.name} and "
                    f"{source.filename or source.name} share the lookup name "
                    f"{source.name}"
                )
                raise InvalidArgumentError(msg)
            bodies.append(self._check(env, source))
            markups[source.name] = bodies[-1]

        entry_name = sources[0].name
        if len(sources) > 1:
            entry_name = f"{name}:composed"
            markups[entry_name] = _entry_markup(sources[0].name, bodies[1:])

        try:
            template = env.get_template(entry_name)
        except jinja2.TemplateSyntaxError as e:
            self._logger.error(
                "template_syntax_error", template=name, error=e.message
            )
            raise TemplateSyntaxError(
                e.message or str(e), source_name=name, lineno=e.lineno
            ) from e

        self._logger.debug(
            "template_set_compiled",
            template=name,
            sources=[source.name for source in sources],
        )
        return NamedTemplate(
            name=name,
            sources=tuple(sources),
            registry=self._registry,
            template=template,
        )

    def compile_sets(
        self,
        layout: TemplateLike,
        sets: Iterable[SetDescriptor],
    ) -> TemplateCatalog:
        """Compile one template per set, each with the shared layout.

        Each set descriptor is ``(lookup_key, fragment, ...)``. A fragment
        that is the layout file itself is skipped, so descriptors that also
        list the layout compile the same way.

        Example:
            catalog = compiler.compile_sets(
                "views/master.html",
                [
                    ("authenticators", "views/authenticators.html"),
                    ("settings", "views/settings.html", "views/_nav.html"),
                ],
            )

        Raises:
            InvalidArgumentError: If a descriptor has no string lookup key.
            TemplateSyntaxError: On the first source that fails; no catalog
                is returned.
        """
        compiled: dict[str, NamedTemplate] = {}

        for descriptor in sets:
            if not descriptor or not isinstance(descriptor[0], str):
                msg = f"set descriptor must start with a lookup key: {descriptor!r}"
                raise InvalidArgumentError(msg)

            key = descriptor[0]
            layout_source = as_source(layout)
            fragments = [
                as_source(fragment)
                for fragment in descriptor[1:]
                if not self._is_layout(fragment, layout_source)
            ]
            compiled[key] = self.compile_named(key, [layout_source, *fragments])

        catalog = TemplateCatalog(compiled)
        self._logger.info("catalog_compiled", templates=len(catalog), mode="sets")
        return catalog

    def compile_tree(
        self,
        root: Path,
        *,
        suffixes: tuple[str, ...] = DEFAULT_SUFFIXES,
        discover: TemplateDiscovery = list_template_sources,
    ) -> TemplateCatalog:
        """Compile every template under `root` into one catalog.

        All discovered sources share one environment, keyed by their path
        relative to `root`, so templates can extend and include one another
        by relative path. Each source becomes a catalog entry under the same
        key.

        Args:
            root: Template root directory.
            suffixes: File suffixes that mark a template.
            discover: Discovery collaborator; substitute it to compile
                in-memory sources.

        Raises:
            DiscoveryError: If `root` does not exist or is not a directory.
            TemplateSyntaxError: On the first source that fails.
        """
        if not root.is_dir():
            msg = f"template root is not a directory: {root}"
            raise DiscoveryError(msg, root=root)

        sources = [as_source(source) for source in discover(root, suffixes)]

        markups: dict[str, str] = {}
        env = create_environment(
            self._registry, DictLoader(markups), config=self._config
        )
        for source in sources:
            markups[source.name] = self._check(env, source)

        compiled = {
            source.name: NamedTemplate(
                name=source.name,
                sources=(source,),
                registry=self._registry,
                template=env.get_template(source.name),
            )
            for source in sources
        }

        catalog = TemplateCatalog(compiled)
        self._logger.info(
            "catalog_compiled", templates=len(catalog), mode="tree", root=str(root)
        )
        return catalog

    def _check(self, env: jinja2.Environment, source: TemplateSource) -> str:
        """Read and compile one source on its own, returning its markup."""
        try:
            markup = source.read()
            tree = env.parse(markup, source.name, source.filename)
            callee = _undeclared_call(env, tree)
            if callee is not None:
                msg = f"no helper named '{callee.name}'"
                raise TemplateSyntaxError(
                    msg,
                    source_name=source.filename or source.name,
                    lineno=callee.lineno,
                )
            env.compile(tree, source.name, source.filename)
        except TemplateSyntaxError as e:
            source.state = ParseState.ERROR
            self._logger.error(
                "template_syntax_error", template=source.name, error=str(e)
            )
            raise
        except jinja2.TemplateSyntaxError as e:
            source.state = ParseState.ERROR
            self._logger.error(
                "template_syntax_error",
                template=source.name,
                error=e.message,
                lineno=e.lineno,
            )
            raise _syntax_error(e, source) from e

        source.state = ParseState.PARSED
        return markup

    @staticmethod
    def _is_layout(fragment: TemplateLike, layout: TemplateSource) -> bool:
        if layout.path is None or isinstance(fragment, TemplateSource):
            return False
        return Path(fragment) == layout.path
