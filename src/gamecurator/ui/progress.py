"""Rich progress bars for batch commands."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)


class RichProgress:
    """:class:`ProgressReporter` drawing one bar per batch on a shared console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._title = ""

    def start(self, title: str, *, total: int) -> None:
        self.finish()
        self._title = title
        self._console.rule(f"[bold cyan]{title}")
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=None),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=self._console,
            transient=False,
        )
        self._progress.start()
        self._task_id = self._progress.add_task(title, total=total)

    def advance(self, *, description: str | None = None, step: int = 1) -> None:
        if self._progress is None or self._task_id is None:
            return
        if description:
            self._progress.update(self._task_id, description=description)
        self._progress.advance(self._task_id, step)

    def finish(self, message: str | None = None) -> None:
        if self._progress is None or self._task_id is None:
            return
        task = self._progress.tasks[self._task_id]
        self._progress.update(
            self._task_id,
            description=self._title,
            completed=task.total if task.total else task.completed,
        )
        self._progress.stop()
        self._progress = None
        self._task_id = None
        if message:
            self._console.print(f"[bold green]✔ {message}[/bold green]")
