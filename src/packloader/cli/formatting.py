"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from packloader.core.formatting import stage_to_color


if TYPE_CHECKING:
    from packloader.core.models import PackageStage, PackageSummary


def _format_stage_with_color(stage: PackageStage) -> Text:
    """Format a package stage with color coding.

    Args:
        stage: Lifecycle stage of a package.

    Returns:
        Rich Text object with appropriate color:
        - initialized -> green
        - header_parsed -> yellow
        - unloaded -> red
    """
    color = stage_to_color(stage)
    return Text(stage.value, style=color) if color else Text(stage.value)


def _summary_lines(summary: PackageSummary) -> list[str]:
    """Render a package summary as indented "key: value" lines."""
    return [
        f"  Version: {summary.file_version}/{summary.licensee_version}",
        f"  Folder: {summary.folder_name or '(none)'}",
        f"  Flags: 0x{summary.package_flags:08X}",
        f"  Header size: {summary.header_size}",
        f"  Names: {summary.name_count} @ {summary.name_offset}",
        f"  Exports: {summary.export_count} @ {summary.export_offset}",
        f"  Imports: {summary.import_count} @ {summary.import_offset}",
    ]
