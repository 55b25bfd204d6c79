"""Unit tests for template sources and discovery."""

from pathlib import Path, PurePosixPath

import pytest

from viewrender.exceptions import DiscoveryError, TemplateSyntaxError
from viewrender.templating import (
    ParseState,
    TemplateSource,
    as_source,
    list_template_sources,
    lookup_name,
)


class TestLookupName:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("views/research/template.html", "template.html"),
            ("master.html", "master.html"),
            ("views/ trailing.html ", "trailing.html"),
        ],
    )
    def test_last_segment(self, path: str, expected: str) -> None:
        assert lookup_name(path) == expected

    def test_accepts_paths(self) -> None:
        assert lookup_name(PurePosixPath("views/a/b.html")) == "b.html"


class TestTemplateSource:
    def test_from_path_named_by_last_segment(self) -> None:
        source = TemplateSource.from_path("views/profile.html")

        assert source.name == "profile.html"
        assert source.path == Path("views/profile.html")
        assert source.markup is None
        assert source.state is ParseState.UNPARSED

    def test_from_path_explicit_name(self) -> None:
        source = TemplateSource.from_path("views/profile.html", name="pages/profile")

        assert source.name == "pages/profile"

    def test_from_string(self) -> None:
        source = TemplateSource.from_string("<p>hi</p>")

        assert source.name == "template"
        assert source.filename is None
        assert source.read() == "<p>hi</p>"

    def test_read_file(self, tmp_path: Path) -> None:
        path = tmp_path / "page.html"
        _ = path.write_text("<p>{{ x }}</p>")

        assert TemplateSource.from_path(path).read() == "<p>{{ x }}</p>"

    def test_read_missing_file_raises(self, tmp_path: Path) -> None:
        source = TemplateSource.from_path(tmp_path / "missing.html")

        with pytest.raises(TemplateSyntaxError, match="cannot read template"):
            _ = source.read()

    def test_read_without_path_or_markup_raises(self) -> None:
        with pytest.raises(TemplateSyntaxError, match="neither a path nor markup"):
            _ = TemplateSource(name="empty").read()


class TestAsSource:
    def test_string_path(self) -> None:
        source = as_source("views/page.html")

        assert source.name == "page.html"
        assert source.path == Path("views/page.html")

    def test_copies_existing_source(self) -> None:
        original = TemplateSource.from_string("x", name="inline")
        original.state = ParseState.ERROR

        copy = as_source(original)

        assert copy is not original
        assert copy.name == "inline"
        assert copy.markup == "x"
        assert copy.state is ParseState.UNPARSED


class TestListTemplateSources:
    def test_discovers_sorted_relative_names(self, tmp_path: Path) -> None:
        (tmp_path / "b").mkdir()
        _ = (tmp_path / "z.html").write_text("z")
        _ = (tmp_path / "a.html").write_text("a")
        _ = (tmp_path / "b" / "c.html").write_text("c")
        _ = (tmp_path / "notes.txt").write_text("ignored")

        sources = list_template_sources(tmp_path)

        assert [s.name for s in sources] == ["a.html", "b/c.html", "z.html"]

    def test_custom_suffixes(self, tmp_path: Path) -> None:
        _ = (tmp_path / "a.html").write_text("a")
        _ = (tmp_path / "b.txt").write_text("b")

        sources = list_template_sources(tmp_path, (".txt",))

        assert [s.name for s in sources] == ["b.txt"]

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        root = tmp_path / "missing"

        with pytest.raises(DiscoveryError, match="not a directory") as exc_info:
            _ = list_template_sources(root)

        assert exc_info.value.root == root
