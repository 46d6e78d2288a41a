"""Terminal tables for library reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gamecurator.domain.library import DuplicateReport


def duplicates_table(reports: Sequence[DuplicateReport]) -> Table:
    table = Table(title="Possible duplicates")
    table.add_column("Code")
    table.add_column("Status")
    table.add_column("Location")
    table.add_column("Found", justify="right")
    for report in reports:
        for index, location in enumerate(report.locations):
            table.add_row(
                Text(report.code) if index == 0 else "",
                Text(report.status()) if index == 0 else "",
                Text(str(location.path)),
                Text(location.describe()),
            )
    return table


def show_duplicates(reports: Sequence[DuplicateReport], console: Console | None = None) -> int:
    """Print the reports and return how many codes need a look."""

    output = console or Console()
    if not reports:
        output.print("No duplicates found")
        return 0
    output.print(duplicates_table(reports))
    return len(reports)
