"""Rich-based progress reporter for bulk package loads."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


if TYPE_CHECKING:
    from types import TracebackType

    from rich.console import Console

    from packloader.core.ports import ProgressCallback


class RichProgressReporter:
    """Progress reporter drawing a Rich bar per loading task.

    Each task counts packages rather than bytes. The display is transient,
    so it disappears once stopped and leaves the terminal to the results.

    Example:
        with RichProgressReporter() as reporter:
            results = load_packages(loader, paths, progress=reporter)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Create the progress display without starting it.

        Args:
            console: Rich console to draw on. Defaults to Rich's global one.
        """
        self._progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self._tasks: dict[str, tuple[TaskID, int]] = {}
        self._live = False

    def _ensure_started(self) -> None:
        if not self._live:
            self._progress.start()
            self._live = True

    def __enter__(self) -> RichProgressReporter:
        self._ensure_started()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()
        self._live = False

    def start_task(self, name: str, total: int) -> ProgressCallback:
        """Add a bar for a task, starting the display if needed.

        Args:
            name: Description shown next to the bar.
            total: Number of packages the task will load.

        Returns:
            Callback taking (packages done, total).
        """
        self._ensure_started()
        task_id = self._progress.add_task(name, total=total)
        self._tasks[name] = (task_id, total)

        def callback(done: int, _total: int) -> None:
            self._progress.update(task_id, completed=done)

        return callback

    def finish_task(self, name: str) -> None:
        """Fill the bar of a task. Unknown names are ignored."""
        entry = self._tasks.pop(name, None)
        if entry is not None:
            task_id, total = entry
            self._progress.update(task_id, completed=total)
