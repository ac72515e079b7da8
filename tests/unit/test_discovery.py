"""Unit tests for package discovery and deserializer resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from packloader.core.models import PackageStage


@pytest.mark.core
@pytest.mark.tier(1)
class TestDiscoverPackages:
    """Tests for discover_packages()."""

    def test_finds_packages_recursively(self, tmp_path: Path) -> None:
        """Default search should descend into subdirectories."""
        from packloader.discovery import discover_packages

        (tmp_path / "System").mkdir()
        (tmp_path / "Maps").mkdir()
        (tmp_path / "System" / "Core.u").write_bytes(b"")
        (tmp_path / "Maps" / "Entry.umap").write_bytes(b"")
        (tmp_path / "readme.txt").write_text("not a package")

        result = discover_packages(tmp_path)

        assert result == [tmp_path / "Maps" / "Entry.umap", tmp_path / "System" / "Core.u"]

    def test_non_recursive_skips_subdirectories(self, tmp_path: Path) -> None:
        """recursive=False should only list the top directory."""
        from packloader.discovery import discover_packages

        (tmp_path / "System").mkdir()
        (tmp_path / "Top.upk").write_bytes(b"")
        (tmp_path / "System" / "Core.u").write_bytes(b"")

        assert discover_packages(tmp_path, recursive=False) == [tmp_path / "Top.upk"]

    def test_extensions_are_case_insensitive(self, tmp_path: Path) -> None:
        """Extensions should match regardless of case or leading dot."""
        from packloader.discovery import discover_packages

        (tmp_path / "Core.UPK").write_bytes(b"")
        (tmp_path / "Engine.u").write_bytes(b"")

        assert discover_packages(tmp_path, ["upk"]) == [tmp_path / "Core.UPK"]

    def test_missing_root_returns_empty(self, tmp_path: Path) -> None:
        """A root that is not a directory yields nothing."""
        from packloader.discovery import discover_packages

        assert discover_packages(tmp_path / "nowhere") == []


@pytest.mark.core
@pytest.mark.tier(1)
class TestLoadPackages:
    """Tests for load_packages()."""

    def test_loads_each_unique_key_once(self, deserializer, reader, write_package) -> None:
        """Files sharing a stem should resolve to the first loaded package."""
        from packloader.core.services import PackageLoader
        from packloader.discovery import load_packages

        first = write_package("a/Core.upk", names=["Core"])
        second = write_package("b/Core.upk", names=["Other"])
        engine = write_package("a/Engine.upk")
        loader = PackageLoader(deserializer=deserializer, reader=reader)

        results = load_packages(loader, [first, second, engine])

        assert [r.loaded for r in results] == [True, False, True]
        assert results[0].package is results[1].package
        assert results[1].path == second
        assert reader.reads[str(second)] == 0
        assert len(loader.cache) == 2

    def test_imports_are_initialized(self, deserializer, reader, write_package) -> None:
        """imports=True should go through the import cache."""
        from packloader.core.services import PackageLoader
        from packloader.discovery import load_packages

        path = write_package("Core.u", names=["Core", "Object"])
        loader = PackageLoader(deserializer=deserializer, reader=reader)

        (result,) = load_packages(loader, [path], imports=True)

        assert result.package.stage is PackageStage.INITIALIZED
        assert result.package.names == ("Core", "Object")
        assert loader.get_imported_packages() == [result.package]
        assert len(loader.cache) == 0

    def test_reports_progress(self, deserializer, reader, write_package) -> None:
        """Progress should be reported once per file."""
        from packloader.core.services import PackageLoader
        from packloader.discovery import load_packages

        calls: list[tuple[int, int]] = []

        class RecordingReporter:
            def start_task(self, name, total):
                return lambda done, total: calls.append((done, total))

            def finish_task(self, name):
                calls.append((-1, -1))

        paths = [write_package("Core.u"), write_package("Engine.u")]
        loader = PackageLoader(deserializer=deserializer, reader=reader)

        load_packages(loader, paths, progress=RecordingReporter())

        assert calls == [(1, 2), (2, 2), (-1, -1)]

    def test_bad_file_propagates_format_error(self, deserializer, reader, tmp_path: Path) -> None:
        """A file that is not a package should raise PackageFormatError."""
        from packloader.core.exceptions import PackageFormatError
        from packloader.core.services import PackageLoader
        from packloader.discovery import load_packages

        junk = tmp_path / "Junk.u"
        junk.write_bytes(b"junk")
        loader = PackageLoader(deserializer=deserializer, reader=reader)

        with pytest.raises(PackageFormatError):
            load_packages(loader, [junk])

        assert "Junk" not in loader.cache


@pytest.mark.core
@pytest.mark.tier(0)
class TestLoadDeserializer:
    """Tests for load_deserializer()."""

    def test_instantiates_class(self) -> None:
        """A class attribute should be instantiated."""
        from packloader.adapters.deserializers import SummaryDeserializer
        from packloader.discovery import load_deserializer

        result = load_deserializer("packloader.adapters.deserializers:SummaryDeserializer")

        assert isinstance(result, SummaryDeserializer)

    @pytest.mark.parametrize("spec", ["no_colon", ":Attr", "module:"])
    def test_malformed_path_raises(self, spec: str) -> None:
        """Paths without module and attribute should be rejected."""
        from packloader.core.exceptions import DeserializerLoadError
        from packloader.discovery import load_deserializer

        with pytest.raises(DeserializerLoadError) as exc_info:
            load_deserializer(spec)

        assert exc_info.value.spec == spec
        assert "package.module:Attribute" in (exc_info.value.recovery_hint or "")

    def test_missing_module_raises(self) -> None:
        """An unknown module should raise DeserializerLoadError."""
        from packloader.core.exceptions import DeserializerLoadError
        from packloader.discovery import load_deserializer

        with pytest.raises(DeserializerLoadError, match="Could not import"):
            load_deserializer("packloader_missing_module:Thing")

    def test_missing_attribute_raises(self) -> None:
        """An unknown attribute should raise DeserializerLoadError."""
        from packloader.core.exceptions import DeserializerLoadError
        from packloader.discovery import load_deserializer

        with pytest.raises(DeserializerLoadError, match="no attribute"):
            load_deserializer("packloader.adapters.deserializers:Missing")

    def test_non_deserializer_raises(self) -> None:
        """Attributes without the deserializer methods should be rejected."""
        from packloader.core.exceptions import DeserializerLoadError
        from packloader.discovery import load_deserializer

        with pytest.raises(DeserializerLoadError, match="does not provide"):
            load_deserializer("packloader.config:LoaderConfig")
