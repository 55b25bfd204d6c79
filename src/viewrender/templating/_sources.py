"""Template sources and discovery."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from os import PathLike
from pathlib import Path, PurePath
from typing import Protocol, Self

from viewrender.exceptions import DiscoveryError, TemplateSyntaxError

DEFAULT_SUFFIXES = (".html",)


class ParseState(StrEnum):
    """Compilation progress of a source."""

    UNPARSED = "unparsed"
    PARSED = "parsed"
    ERROR = "error"


def lookup_name(path: str | PurePath) -> str:
    """Return the lookup name for a slash-delimited path.

    Examples:
        >>> lookup_name("views/research/template.html")
        'template.html'
        >>> lookup_name("master.html")
        'master.html'
    """
    text = path.as_posix() if isinstance(path, PurePath) else path
    return text.rpartition("/")[2].strip()


@dataclass(slots=True)
class TemplateSource:
    """A unit of template markup: a file on disk or an inline string.

    Attributes:
        name: Name the compiled template is looked up by.
        path: File holding the markup, or None for inline sources.
        markup: Inline markup, or None for file sources.
        state: Compilation progress, updated by the compiler.
    """

    name: str
    path: Path | None = None
    markup: str | None = None
    state: ParseState = ParseState.UNPARSED

    @classmethod
    def from_path(cls, path: str | PathLike[str], name: str | None = None) -> Self:
        """Create a file source named after the last path segment."""
        file_path = Path(path)
        if name is None:
            name = lookup_name(str(path))
        return cls(name=name, path=file_path)

    @classmethod
    def from_string(cls, markup: str, name: str = "template") -> Self:
        """Create an inline source; no file I/O is ever performed for it."""
        return cls(name=name, markup=markup)

    @property
    def filename(self) -> str | None:
        """Path reported in engine tracebacks, if the source is a file."""
        return str(self.path) if self.path is not None else None

    def read(self) -> str:
        """Return the markup, reading the file for path sources.

        Raises:
            TemplateSyntaxError: If the file cannot be read.
        """
        if self.markup is not None:
            return self.markup
        if self.path is None:
            msg = "template source has neither a path nor markup"
            raise TemplateSyntaxError(msg, source_name=self.name)
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"cannot read template: {e}"
            raise TemplateSyntaxError(msg, source_name=str(self.path)) from e


type TemplateLike = str | PathLike[str] | TemplateSource


def as_source(value: TemplateLike) -> TemplateSource:
    """Normalize a path, path string or source into a fresh `TemplateSource`.

    Existing sources are copied so that per-compilation state never leaks
    between compilations that share an input.
    """
    if isinstance(value, TemplateSource):
        return TemplateSource(name=value.name, path=value.path, markup=value.markup)
    return TemplateSource.from_path(value)


class TemplateDiscovery(Protocol):
    """Finds the template sources under a root directory."""

    def __call__(
        self, root: Path, suffixes: tuple[str, ...]
    ) -> Iterable[TemplateSource]: ...


def list_template_sources(
    root: Path,
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES,
) -> list[TemplateSource]:
    """List every template-bearing file under `root`.

    Sources are named by their POSIX path relative to `root` and returned in
    sorted order, so catalog builds are reproducible.

    Args:
        root: Directory to walk.
        suffixes: File suffixes that mark a template.

    Returns:
        Discovered sources.

    Raises:
        DiscoveryError: If `root` does not exist or is not a directory.
    """
    if not root.is_dir():
        msg = f"template root is not a directory: {root}"
        raise DiscoveryError(msg, root=root)

    return [
        TemplateSource.from_path(path, name=path.relative_to(root).as_posix())
        for path in sorted(root.rglob("*"))
        if path.is_file() and path.name.endswith(suffixes)
    ]
