"""Port for reporting batch progress."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressReporter(Protocol):
    def start(self, title: str, *, total: int) -> None: ...

    def advance(self, *, description: str | None = None, step: int = 1) -> None: ...

    def finish(self, message: str | None = None) -> None: ...


class NullProgress:
    """Reporter that discards every update."""

    def start(self, title: str, *, total: int) -> None:
        del title, total

    def advance(self, *, description: str | None = None, step: int = 1) -> None:
        del description, step

    def finish(self, message: str | None = None) -> None:
        del message
