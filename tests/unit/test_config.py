"""Unit tests for loader configuration."""

from __future__ import annotations

import dataclasses

import pytest

from packloader.config import DEFAULT_EXTENSIONS, LoaderConfig, normalize_extensions
from packloader.core.models import FileAccess


@pytest.mark.core
class TestLoaderConfig:
    """Tests for LoaderConfig defaults."""

    def test_defaults(self) -> None:
        """Keys are exact, locking is on and paths open read-only."""
        config = LoaderConfig()

        assert config.case_sensitive_keys is True
        assert config.thread_safe is True
        assert config.access is FileAccess.READ

    def test_is_frozen(self) -> None:
        """Config should be immutable once a loader holds it."""
        config = LoaderConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.thread_safe = False  # type: ignore[misc]


@pytest.mark.core
class TestNormalizeExtensions:
    """Tests for normalize_extensions()."""

    def test_adds_dot_and_lowercases(self) -> None:
        """Extensions are lowercased and dotted."""
        assert normalize_extensions(["UPK", ".Umap", " u "]) == (".upk", ".umap", ".u")

    def test_skips_blank_entries(self) -> None:
        """Empty strings are dropped."""
        assert normalize_extensions(["", "  ", "upk"]) == (".upk",)

    def test_defaults_are_normalized(self) -> None:
        """Default extensions are already in normalized form."""
        assert normalize_extensions(DEFAULT_EXTENSIONS) == DEFAULT_EXTENSIONS
