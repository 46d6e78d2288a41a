"""Port for the human-in-the-loop confirmation step."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gamecurator.domain.identification.decision import Decision
    from gamecurator.domain.model import ScoredCode


@runtime_checkable
class ConfirmationProvider(Protocol):
    """Chooses among escalated candidates.

    A single candidate is a yes/no question; several candidates are a list with
    a "none" option. Implementations return ``Accepted`` for a pick and
    ``Rejected`` when the human declines.
    """

    def confirm(self, candidates: Sequence[ScoredCode], *, subject: str) -> Decision: ...
