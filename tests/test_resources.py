"""Tests for soffit.resources — file-system and static catalogs."""

from pathlib import Path

from soffit.resources import FileSystemCatalog, ResourceCatalog, StaticCatalog


class TestStaticCatalog:
    def test_direct_children_only(self) -> None:
        catalog = StaticCatalog(["mod/view.jsp", "mod/partials/header.jsp", "other/view.jsp"])
        assert catalog.list_resources("mod/") == frozenset({"mod/view.jsp", "mod/partials/"})

    def test_prefix_without_slash(self) -> None:
        catalog = StaticCatalog(["mod/view.jsp"])
        assert catalog.list_resources("mod") == frozenset({"mod/view.jsp"})

    def test_unknown_prefix(self) -> None:
        assert StaticCatalog(["mod/view.jsp"]).list_resources("nope/") == frozenset()

    def test_is_resource_catalog(self) -> None:
        assert isinstance(StaticCatalog([]), ResourceCatalog)


class TestFileSystemCatalog:
    def test_lists_files_and_directories(self, tmp_path: Path) -> None:
        module = tmp_path / "soffit" / "weather"
        (module / "partials").mkdir(parents=True)
        (module / "view.html").write_text("", encoding="utf-8")
        (module / "edit.maximized.html").write_text("", encoding="utf-8")

        catalog = FileSystemCatalog(tmp_path)
        assert catalog.list_resources("soffit/weather/") == frozenset(
            {
                "soffit/weather/view.html",
                "soffit/weather/edit.maximized.html",
                "soffit/weather/partials/",
            }
        )

    def test_leading_slash_prefix(self, tmp_path: Path) -> None:
        (tmp_path / "mod").mkdir()
        (tmp_path / "mod" / "view.html").write_text("", encoding="utf-8")
        catalog = FileSystemCatalog(tmp_path)
        assert catalog.list_resources("/mod/") == frozenset({"/mod/view.html"})

    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert FileSystemCatalog(tmp_path).list_resources("soffit/missing/") == frozenset()

    def test_parent_reference_is_empty(self, tmp_path: Path) -> None:
        inner = tmp_path / "root"
        inner.mkdir()
        (tmp_path / "secret.html").write_text("", encoding="utf-8")
        assert FileSystemCatalog(inner).list_resources("../") == frozenset()

    def test_root_property(self, tmp_path: Path) -> None:
        assert FileSystemCatalog(tmp_path).root == tmp_path
