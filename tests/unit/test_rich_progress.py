"""Unit tests for RichProgressReporter adapter."""

from io import StringIO

import pytest


@pytest.mark.progress
class TestRichProgressReporter:
    """Tests for RichProgressReporter."""

    def test_rich_reporter_satisfies_protocol(self) -> None:
        """RichProgressReporter should implement ProgressReporter."""
        from packloader.core.ports import ProgressReporter
        from packloader.progress import RichProgressReporter

        reporter = RichProgressReporter()
        assert isinstance(reporter, ProgressReporter)

    def test_start_task_returns_callable(self) -> None:
        """start_task() should return a callable progress callback."""
        from packloader.progress import RichProgressReporter

        with RichProgressReporter() as reporter:
            callback = reporter.start_task("Loading packages", 10)

            assert callable(callback)
            callback(3, 10)

    def test_finish_task_completes_task(self) -> None:
        """finish_task() should mark the task as fully done."""
        from packloader.progress import RichProgressReporter

        with RichProgressReporter() as reporter:
            reporter.start_task("Loading packages", 10)
            reporter.finish_task("Loading packages")

            (task,) = reporter._progress.tasks
            assert task.completed == 10

    def test_finish_unknown_task_is_ignored(self) -> None:
        """finish_task() for an unknown name should not raise."""
        from packloader.progress import RichProgressReporter

        with RichProgressReporter() as reporter:
            reporter.finish_task("never started")

    def test_auto_starts_outside_context_manager(self) -> None:
        """start_task() should start the display when needed."""
        from packloader.progress import RichProgressReporter

        reporter = RichProgressReporter()
        try:
            reporter.start_task("Loading packages", 1)
            assert reporter._live
        finally:
            reporter.__exit__(None, None, None)


@pytest.mark.progress
class TestRichProgressReporterIntegration:
    """Integration tests for RichProgressReporter with load_packages."""

    def test_load_packages_with_rich_progress(self, deserializer, reader, write_package) -> None:
        """load_packages() should work with RichProgressReporter."""
        from rich.console import Console

        from packloader.core.services import PackageLoader
        from packloader.discovery import load_packages
        from packloader.progress import RichProgressReporter

        paths = [write_package("Core.u"), write_package("Engine.u")]
        loader = PackageLoader(deserializer=deserializer, reader=reader)
        console = Console(file=StringIO())

        with RichProgressReporter(console=console) as reporter:
            results = load_packages(loader, paths, progress=reporter)

        assert [r.package.name for r in results] == ["Core", "Engine"]
