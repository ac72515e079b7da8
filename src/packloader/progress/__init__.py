"""Progress reporting adapters."""

from packloader.progress.rich_progress import RichProgressReporter


__all__ = ["RichProgressReporter"]
