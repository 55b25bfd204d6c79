"""Compiled templates and the catalogs that hold them."""

import threading
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import jinja2

from viewrender.exceptions import (
    TemplateExecutionError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)
from viewrender.formatting import FormatterRegistry

from ._context import model_context
from ._sources import TemplateSource


@dataclass(frozen=True, slots=True)
class NamedTemplate:
    """A compiled, reusable template.

    Attributes:
        name: Name the template was compiled under.
        sources: Sources it was built from, entry (layout) first.
        registry: Helper registry attached at compile time.
        template: The compiled Jinja2 entry template.
    """

    name: str
    sources: tuple[TemplateSource, ...]
    registry: FormatterRegistry = field(repr=False)
    template: jinja2.Template = field(repr=False)

    def render(self, model: object = None) -> str:
        """Execute the template against `model`.

        Raises:
            TemplateSyntaxError: If a template loaded lazily during execution
                (an ``include`` target, for example) fails to compile.
            TemplateExecutionError: For any other failure while rendering.
        """
        try:
            return self.template.render(model_context(model))
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(
                e.message or str(e),
                source_name=e.name or self.name,
                lineno=e.lineno,
            ) from e
        except Exception as e:  # noqa: BLE001
            msg = f"failed to render {self.name}: {e}"
            raise TemplateExecutionError(msg, template_name=self.name, cause=e) from e


class TemplateCatalog(Mapping[str, NamedTemplate]):
    """Immutable mapping from lookup key to compiled template.

    A catalog is never updated in place. Reloading means building a new
    catalog and publishing it through a `CatalogReference`.
    """

    __slots__ = ("_templates",)

    def __init__(self, templates: Mapping[str, NamedTemplate] | None = None) -> None:
        self._templates: MappingProxyType[str, NamedTemplate] = MappingProxyType(
            dict(templates or {})
        )

    def __getitem__(self, key: str) -> NamedTemplate:
        try:
            return self._templates[key]
        except KeyError:
            msg = f"template {key} not found"
            raise TemplateNotFoundError(msg, key=key) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"TemplateCatalog({sorted(self._templates)!r})"

    def get_template(self, key: str) -> NamedTemplate:
        """Return the template under `key`.

        Raises:
            TemplateNotFoundError: If the catalog has no such key.
        """
        return self[key]

    def render(self, key: str, model: object = None) -> str:
        """Render the template under `key` against `model`."""
        return self[key].render(model)


class CatalogReference:
    """The currently published catalog.

    Readers take `current` without locking; writers swap in a complete new
    catalog under a lock, so a reader sees either the old catalog or the
    new one and never a partially rebuilt one.
    """

    __slots__ = ("_catalog", "_lock")

    def __init__(self, catalog: TemplateCatalog | None = None) -> None:
        self._catalog: TemplateCatalog = (
            catalog if catalog is not None else TemplateCatalog()
        )
        self._lock: threading.Lock = threading.Lock()

    @property
    def current(self) -> TemplateCatalog:
        return self._catalog

    def publish(self, catalog: TemplateCatalog) -> TemplateCatalog:
        """Replace the published catalog and return the previous one."""
        with self._lock:
            previous = self._catalog
            self._catalog = catalog
        return previous

    def rebuild(self, build: Callable[[], TemplateCatalog]) -> TemplateCatalog:
        """Build a new catalog and publish it.

        If `build` raises, the published catalog is left untouched and the
        error propagates.

        Returns:
            The newly published catalog.
        """
        with self._lock:
            catalog = build()
            self._catalog = catalog
        return catalog
