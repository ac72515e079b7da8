"""Formatting utilities for domain logic."""

from packloader.core.models import PackageStage


def stage_to_color(stage: PackageStage) -> str:
    """Map a package stage to a color name.

    Args:
        stage: Lifecycle stage of a package.

    Returns:
        Color name string:
        - INITIALIZED -> "green"
        - HEADER_PARSED -> "yellow"
        - UNLOADED -> "red"
    """
    color_map = {
        PackageStage.INITIALIZED: "green",
        PackageStage.HEADER_PARSED: "yellow",
        PackageStage.UNLOADED: "red",
    }
    return color_map.get(stage, "")


def format_size(size_bytes: int) -> str:
    """Format size in bytes to human-readable format."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"
