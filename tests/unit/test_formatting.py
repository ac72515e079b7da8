"""Unit tests for core and CLI formatting utilities."""

from __future__ import annotations

import pytest

from packloader.core.formatting import format_size, stage_to_color
from packloader.core.models import PackageStage


@pytest.mark.core
@pytest.mark.tier(0)
@pytest.mark.parametrize(
    ("stage", "color"),
    [
        (PackageStage.INITIALIZED, "green"),
        (PackageStage.HEADER_PARSED, "yellow"),
        (PackageStage.UNLOADED, "red"),
    ],
)
def test_stage_to_color(stage: PackageStage, color: str) -> None:
    """Each stage maps to its display color."""
    assert stage_to_color(stage) == color


@pytest.mark.core
@pytest.mark.tier(0)
@pytest.mark.parametrize(
    ("size", "expected"),
    [(0, "0.0 B"), (512, "512.0 B"), (2048, "2.0 KB"), (5 * 1024**2, "5.0 MB")],
)
def test_format_size(size: int, expected: str) -> None:
    """Sizes are rendered with a binary unit."""
    assert format_size(size) == expected


@pytest.mark.cli
@pytest.mark.tier(0)
def test_stage_text_is_styled() -> None:
    """CLI stage text should carry the stage color."""
    from packloader.cli.formatting import _format_stage_with_color

    text = _format_stage_with_color(PackageStage.INITIALIZED)

    assert text.plain == "initialized"
    assert str(text.style) == "green"


@pytest.mark.cli
@pytest.mark.tier(0)
def test_summary_lines() -> None:
    """Summary lines should show versions, flags and table positions."""
    from packloader.cli.formatting import _summary_lines
    from packloader.core.models import PackageSummary

    summary = PackageSummary(
        file_version=61,
        licensee_version=2,
        header_size=120,
        folder_name="",
        package_flags=0x1,
        name_count=3,
        name_offset=60,
        export_count=0,
        export_offset=0,
        import_count=1,
        import_offset=90,
    )

    lines = _summary_lines(summary)

    assert "  Version: 61/2" in lines
    assert "  Folder: (none)" in lines
    assert "  Flags: 0x00000001" in lines
    assert "  Imports: 1 @ 90" in lines
