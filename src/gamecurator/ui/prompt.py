"""Terminal prompts for escalated identification decisions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt
from rich.table import Table
from rich.text import Text

from gamecurator.domain.identification import Accepted, NoCandidates, Rejected

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gamecurator.domain.identification import Decision
    from gamecurator.domain.model import ScoredCode


class ConsoleConfirmation:
    """Ask on the terminal which candidate, if any, a directory is."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def confirm(self, candidates: Sequence[ScoredCode], *, subject: str) -> Decision:
        if not candidates:
            return NoCandidates(reason="nothing to confirm")
        if len(candidates) == 1:
            return self._confirm_one(candidates[0], subject=subject)
        return self._choose(candidates, subject=subject)

    def _confirm_one(self, candidate: ScoredCode, *, subject: str) -> Decision:
        question = (
            f"Is [bold]{escape(subject)}[/bold] the game [cyan]{escape(candidate.code)}[/cyan] "
            f"({escape(candidate.display_name or 'no name')}, score {candidate.score})?"
        )
        if Confirm.ask(question, console=self._console, default=False):
            return Accepted(candidate=candidate)
        return Rejected(reason="declined on the terminal")

    def _choose(self, candidates: Sequence[ScoredCode], *, subject: str) -> Decision:
        table = Table(title=Text(subject))
        table.add_column("#", justify="right")
        table.add_column("Code")
        table.add_column("Name")
        table.add_column("Source")
        table.add_column("Score", justify="right")
        for index, candidate in enumerate(candidates):
            table.add_row(
                str(index),
                Text(candidate.code),
                Text(candidate.display_name or ""),
                Text(candidate.source_id),
                str(candidate.score),
            )
        none_choice = len(candidates)
        table.add_row(str(none_choice), "", "[italic]none of these[/italic]", "", "")
        self._console.print(table)

        choice = IntPrompt.ask(
            "Which one is it",
            console=self._console,
            choices=[str(index) for index in range(none_choice + 1)],
            show_choices=False,
        )
        if choice == none_choice:
            return Rejected(reason="none chosen on the terminal")
        return Accepted(candidate=candidates[choice])
